import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI

from cncvlo import __version__
from cncvlo.api.routes import health, oai
from cncvlo.config import get_settings
from cncvlo.database import SessionLocal, check_connection
from cncvlo.logging_setup import configure_logging
from cncvlo.schemas import MetaResponse
from cncvlo.services.formats import FORMAT_REGISTRY

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    with SessionLocal() as db:
        check_connection(db)
    logger.info("Starting CNC-VLO node at %s", settings.base_url)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="CNC VLO",
        version=__version__,
        description="OAI-PMH endpoint exposing CNC corpora and services metadata to CLARIN VLO.",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(oai.router)

    @app.get("/meta", response_model=MetaResponse)
    def meta() -> MetaResponse:
        settings = get_settings()
        return MetaResponse(
            service="cnc-vlo",
            version=__version__,
            repository_name=settings.repository_name,
            base_url=settings.base_url,
            metadata_formats=list(FORMAT_REGISTRY),
            timestamp=datetime.now(UTC),
        )

    return app


app = create_app()
