import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_vlo.db")
os.environ.setdefault("BASE_URL", "http://vlo.test")
os.environ.setdefault("REPOSITORY_NAME", "Test VLO repository")
os.environ.setdefault("ADMIN_EMAIL", "admin@vlo.test,curator@vlo.test")
os.environ.setdefault("PUBLISHER", "Czech National Corpus")

from cncvlo.config import get_settings  # noqa: E402
from cncvlo.database import SessionLocal, engine  # noqa: E402
from cncvlo.main import create_app  # noqa: E402
from cncvlo.models.base import Base  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    get_settings.cache_clear()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    with SessionLocal() as db:
        yield db
        db.rollback()
