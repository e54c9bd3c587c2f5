from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cncvlo.config import Settings, get_settings
from cncvlo.database import check_connection, get_db
from cncvlo.models.catalog import MetadataCommon
from cncvlo.schemas import HealthDetailsResponse, HealthResponse
from cncvlo.services.repository import SqlRecordRepository

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/health/details", response_model=HealthDetailsResponse)
def health_details(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> HealthDetailsResponse:
    check_connection(db)
    published = db.scalar(select(func.count()).select_from(MetadataCommon).where(MetadataCommon.deleted.is_(False)))
    earliest = SqlRecordRepository(db, time_zone=settings.time_zone()).earliest_datestamp()
    return HealthDetailsResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        database_ok=True,
        published_records=int(published or 0),
        earliest_datestamp=earliest,
    )
