import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cncvlo.constants import OAI_DELETED_RECORD_POLICY, OAI_GRANULARITY, OAI_PROTOCOL_VERSION
from cncvlo.enums import Verb
from cncvlo.services.formats import FORMAT_REGISTRY, ConversionContext, HarvestedRecord, MetadataFormat, RecordHeader
from cncvlo.services.oaipmh.arguments import ProtocolRequest
from cncvlo.services.oaipmh.errors import ErrorCode, InternalFailure, Outcome, ProtocolFailure, Success
from cncvlo.services.repository import RecordRepository, RepositoryError
from cncvlo.services.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryInfo:
    name: str
    base_url: str
    admin_emails: tuple[str, ...] = ()


@dataclass(frozen=True)
class IdentifyInfo:
    repository_name: str
    base_url: str
    earliest_datestamp: datetime
    admin_emails: tuple[str, ...] = ()
    protocol_version: str = OAI_PROTOCOL_VERSION
    deleted_record: str = OAI_DELETED_RECORD_POLICY
    granularity: str = OAI_GRANULARITY


@dataclass(frozen=True)
class OAISet:
    spec: str
    name: str


@dataclass
class VerbDispatcher:
    """Runs one validated request against the repository.

    Every precondition failure is returned before the repository is touched.
    Repository failures are logged and turned into an internal failure.
    """

    repository: RecordRepository
    repository_info: RepositoryInfo
    context: ConversionContext
    formats: Mapping[str, MetadataFormat] = field(default_factory=lambda: dict(FORMAT_REGISTRY))
    supports_sets: bool = False

    def dispatch(self, request: ProtocolRequest) -> Outcome[Any]:
        handlers: dict[Verb, Callable[[ProtocolRequest], Outcome[Any]]] = {
            Verb.identify: self.identify,
            Verb.get_record: self.get_record,
            Verb.list_identifiers: self.list_identifiers,
            Verb.list_metadata_formats: self.list_metadata_formats,
            Verb.list_records: self.list_records,
            Verb.list_sets: self.list_sets,
        }
        logger.debug("Dispatching OAI-PMH verb %s", request.verb.value)
        try:
            outcome = handlers[request.verb](request)
        except RepositoryError as exc:
            logger.exception("Repository failure while handling %s", request.verb.value)
            return InternalFailure(detail=str(exc))
        if isinstance(outcome, ProtocolFailure):
            logger.debug("OAI-PMH %s answered with %s", request.verb.value, [e.code.value for e in outcome.errors])
        return outcome

    def _resolve_format(self, request: ProtocolRequest) -> MetadataFormat | ProtocolFailure:
        metadata_format = self.formats.get(request.metadata_prefix or "")
        if metadata_format is None:
            return ProtocolFailure.of(
                ErrorCode.cannot_disseminate_format, f"Unknown metadata format `{request.metadata_prefix}`"
            )
        return metadata_format

    def _check_set(self, request: ProtocolRequest) -> ProtocolFailure | None:
        if request.set_spec and not self.supports_sets:
            return ProtocolFailure.of(ErrorCode.no_set_hierarchy, "Sets functionality not implemented")
        return None

    def identify(self, request: ProtocolRequest) -> Outcome[IdentifyInfo]:
        earliest = self.repository.earliest_datestamp()
        return Success(
            IdentifyInfo(
                repository_name=self.repository_info.name,
                base_url=request.url,
                earliest_datestamp=earliest or now_utc(),
                admin_emails=self.repository_info.admin_emails,
            )
        )

    def get_record(self, request: ProtocolRequest) -> Outcome[HarvestedRecord]:
        metadata_format = self._resolve_format(request)
        if isinstance(metadata_format, ProtocolFailure):
            return metadata_format
        record = self.repository.fetch_by_identifier(request.identifier or "")
        if record is None:
            return ProtocolFailure.of(ErrorCode.id_does_not_exist, f"Result for ID = {request.identifier} not found")
        return Success(metadata_format.harvest(record, self.context))

    def list_identifiers(self, request: ProtocolRequest) -> Outcome[list[RecordHeader]]:
        outcome = self.list_records(request)
        if isinstance(outcome, Success):
            return Success([harvested.header for harvested in outcome.data])
        return outcome

    def list_records(self, request: ProtocolRequest) -> Outcome[list[HarvestedRecord]]:
        metadata_format = self._resolve_format(request)
        if isinstance(metadata_format, ProtocolFailure):
            return metadata_format
        set_failure = self._check_set(request)
        if set_failure is not None:
            return set_failure
        records = self.repository.list_by_date_range(
            request.from_, request.until, until_exclusive=request.until_exclusive
        )
        if not records:
            return ProtocolFailure.of(ErrorCode.no_records_match, "No records")
        return Success([metadata_format.harvest(record, self.context) for record in records])

    def list_metadata_formats(self, request: ProtocolRequest) -> Outcome[list[MetadataFormat]]:
        if request.identifier is not None and not self.repository.exists(request.identifier):
            return ProtocolFailure.of(ErrorCode.id_does_not_exist, f"Result for ID = {request.identifier} not found")
        return Success(list(self.formats.values()))

    def list_sets(self, request: ProtocolRequest) -> Outcome[list[OAISet]]:
        if not self.supports_sets:
            return ProtocolFailure.of(ErrorCode.no_set_hierarchy, "Sets functionality not implemented")
        return Success([])
