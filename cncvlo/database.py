from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker

from cncvlo.config import Settings, get_settings

# KonText's MySQL server drops idle connections after wait_timeout
MYSQL_POOL_RECYCLE_SECONDS = 3600


def build_engine(settings: Settings) -> Engine:
    options: dict = {"pool_pre_ping": True}
    if settings.database_url.startswith("mysql"):
        options["pool_recycle"] = MYSQL_POOL_RECYCLE_SECONDS
    created = create_engine(settings.database_url, **options)

    if settings.database_url.startswith("sqlite"):
        @event.listens_for(created, "connect")
        def _set_sqlite_pragma(dbapi_connection, _) -> None:  # type: ignore[no-untyped-def]
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return created


engine = build_engine(get_settings())
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def check_connection(db: Session) -> None:
    db.execute(text("SELECT 1"))


def get_db() -> Generator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
