import logging
from datetime import UTC, datetime, tzinfo
from typing import Protocol

from sqlalchemy import DateTime, and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from cncvlo.enums import RecordType
from cncvlo.models.catalog import MetadataCommon, MetadataCorpus
from cncvlo.services.records import ContactPerson, CorpusData, Record
from cncvlo.services.utils import as_utc

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    pass


class RecordRepository(Protocol):
    def fetch_by_identifier(self, identifier: str) -> Record | None: ...

    def list_by_date_range(
        self,
        from_: datetime | None,
        until: datetime | None,
        *,
        until_exclusive: bool = False,
    ) -> list[Record]: ...

    def exists(self, identifier: str) -> bool: ...

    def earliest_datestamp(self) -> datetime | None: ...


def modified_at_column():
    return case(
        (
            and_(MetadataCommon.updated.is_not(None), MetadataCommon.updated > MetadataCommon.created),
            MetadataCommon.updated,
        ),
        else_=MetadataCommon.created,
    )


def _record_id(identifier: str) -> int | None:
    try:
        return int(identifier)
    except (TypeError, ValueError):
        return None


class SqlRecordRepository:
    """Catalogue records read from the VLO metadata tables joined with KonText corpora and users.

    Naive database timestamps are interpreted in ``time_zone``.
    """

    def __init__(self, db: Session, *, time_zone: tzinfo = UTC) -> None:
        self.db = db
        self.time_zone = time_zone

    def _select_records(self):
        return (
            select(MetadataCommon)
            .options(
                joinedload(MetadataCommon.contact_user),
                joinedload(MetadataCommon.corpus_metadata).joinedload(MetadataCorpus.corpus),
                joinedload(MetadataCommon.service_metadata),
            )
            .where(MetadataCommon.deleted.is_(False))
        )

    def _to_db_time(self, value: datetime) -> datetime:
        return as_utc(value).astimezone(self.time_zone).replace(tzinfo=None)

    def _to_record(self, row: MetadataCommon) -> Record:
        record_type = row.type.value if isinstance(row.type, RecordType) else str(row.type)
        modified = row.created if row.updated is None or row.updated <= row.created else row.updated
        name = ""
        link = None
        corpus_data = None
        if row.corpus_metadata is not None:
            corpus = row.corpus_metadata.corpus
            name = corpus.name
            link = corpus.web
            if record_type == RecordType.corpus.value:
                corpus_data = CorpusData(size=corpus.size, locale=corpus.locale, keywords=corpus.keywords)
        elif row.service_metadata is not None:
            name = row.service_metadata.name
            link = row.service_metadata.link

        user = row.contact_user
        return Record(
            identifier=row.id,
            type=record_type,
            modified_at=as_utc(modified, self.time_zone),
            name=name,
            license=row.license_info,
            authors=row.authors or "",
            contact_person=ContactPerson(
                first_name=user.firstname,
                last_name=user.lastname,
                email=user.email,
                affiliation=user.affiliation,
            ),
            titles={"en": row.title_en, "cs": row.title_cs},
            descriptions={"en": row.desc_en or "", "cs": row.desc_cs or ""},
            link=link or None,
            date_issued=row.date_issued or None,
            corpus=corpus_data,
        )

    def fetch_by_identifier(self, identifier: str) -> Record | None:
        record_id = _record_id(identifier)
        if record_id is None:
            return None
        try:
            row = self.db.scalar(self._select_records().where(MetadataCommon.id == record_id))
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to fetch record {identifier}") from exc
        if row is None:
            return None
        return self._to_record(row)

    def list_by_date_range(
        self,
        from_: datetime | None,
        until: datetime | None,
        *,
        until_exclusive: bool = False,
    ) -> list[Record]:
        modified = modified_at_column()
        stmt = self._select_records()
        if from_ is not None:
            stmt = stmt.where(modified >= self._to_db_time(from_))
        if until is not None:
            bound = self._to_db_time(until)
            stmt = stmt.where(modified < bound if until_exclusive else modified <= bound)
        stmt = stmt.order_by(modified.asc(), MetadataCommon.id.asc())
        try:
            rows = self.db.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to list records") from exc
        return [self._to_record(row) for row in rows]

    def exists(self, identifier: str) -> bool:
        record_id = _record_id(identifier)
        if record_id is None:
            return False
        stmt = select(MetadataCommon.id).where(MetadataCommon.id == record_id, MetadataCommon.deleted.is_(False))
        try:
            return self.db.scalar(stmt) is not None
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to check record {identifier}") from exc

    def earliest_datestamp(self) -> datetime | None:
        stmt = select(func.min(modified_at_column(), type_=DateTime())).where(MetadataCommon.deleted.is_(False))
        try:
            earliest = self.db.scalar(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to read the earliest datestamp") from exc
        if earliest is None:
            return None
        return as_utc(earliest, self.time_zone)
