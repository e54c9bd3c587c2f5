from fastapi import Depends
from sqlalchemy.orm import Session

from cncvlo.config import Settings, get_settings
from cncvlo.database import get_db
from cncvlo.services.formats import ConversionContext
from cncvlo.services.oaipmh import RepositoryInfo, VerbDispatcher
from cncvlo.services.repository import SqlRecordRepository

DBSession = Depends(get_db)
AppSettings = Depends(get_settings)


def build_dispatcher(db: Session, settings: Settings) -> VerbDispatcher:
    return VerbDispatcher(
        repository=SqlRecordRepository(db, time_zone=settings.time_zone()),
        repository_info=RepositoryInfo(
            name=settings.repository_name,
            base_url=settings.base_url,
            admin_emails=tuple(settings.admin_emails),
        ),
        context=ConversionContext(
            base_url=settings.base_url,
            publisher=settings.publisher,
            search_page_url=settings.search_page_url,
        ),
    )


def get_dispatcher(db: Session = DBSession, settings: Settings = AppSettings) -> VerbDispatcher:
    return build_dispatcher(db, settings)
