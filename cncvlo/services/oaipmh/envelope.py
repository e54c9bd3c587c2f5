from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lxml import etree

from cncvlo.constants import OAI_NS, OAI_SCHEMA, XSI_NS
from cncvlo.enums import Verb
from cncvlo.services.formats import HarvestedRecord, MetadataFormat, RecordHeader
from cncvlo.services.formats.base import append_text
from cncvlo.services.oaipmh.arguments import ProtocolRequest
from cncvlo.services.oaipmh.dispatch import IdentifyInfo, OAISet
from cncvlo.services.oaipmh.errors import InternalFailure, ProtocolFailure, Success
from cncvlo.services.utils import format_datestamp, now_utc


def _oai(tag: str) -> str:
    return f"{{{OAI_NS}}}{tag}"


def _append_header(parent: etree._Element, header: RecordHeader) -> None:
    node = append_text(parent, _oai("header"))
    append_text(node, _oai("identifier"), header.identifier)
    append_text(node, _oai("datestamp"), format_datestamp(header.datestamp))


def _append_record(parent: etree._Element, record: HarvestedRecord) -> None:
    node = append_text(parent, _oai("record"))
    _append_header(node, record.header)
    metadata = append_text(node, _oai("metadata"))
    metadata.append(record.metadata.to_xml())


def _render_identify(parent: etree._Element, info: IdentifyInfo) -> None:
    node = append_text(parent, _oai("Identify"))
    append_text(node, _oai("repositoryName"), info.repository_name)
    append_text(node, _oai("baseURL"), info.base_url)
    append_text(node, _oai("protocolVersion"), info.protocol_version)
    for email in info.admin_emails:
        append_text(node, _oai("adminEmail"), email)
    append_text(node, _oai("earliestDatestamp"), format_datestamp(info.earliest_datestamp))
    append_text(node, _oai("deletedRecord"), info.deleted_record)
    append_text(node, _oai("granularity"), info.granularity)


def _render_get_record(parent: etree._Element, record: HarvestedRecord) -> None:
    _append_record(append_text(parent, _oai("GetRecord")), record)


def _render_list_identifiers(parent: etree._Element, headers: list[RecordHeader]) -> None:
    node = append_text(parent, _oai("ListIdentifiers"))
    for header in headers:
        _append_header(node, header)


def _render_list_metadata_formats(parent: etree._Element, formats: list[MetadataFormat]) -> None:
    node = append_text(parent, _oai("ListMetadataFormats"))
    for metadata_format in formats:
        item = append_text(node, _oai("metadataFormat"))
        append_text(item, _oai("metadataPrefix"), metadata_format.prefix)
        append_text(item, _oai("schema"), metadata_format.schema)
        append_text(item, _oai("metadataNamespace"), metadata_format.namespace)


def _render_list_records(parent: etree._Element, records: list[HarvestedRecord]) -> None:
    node = append_text(parent, _oai("ListRecords"))
    for record in records:
        _append_record(node, record)


def _render_list_sets(parent: etree._Element, sets: list[OAISet]) -> None:
    node = append_text(parent, _oai("ListSets"))
    for oai_set in sets:
        item = append_text(node, _oai("set"))
        append_text(item, _oai("setSpec"), oai_set.spec)
        append_text(item, _oai("setName"), oai_set.name)


PAYLOAD_RENDERERS: dict[Verb, Callable[[etree._Element, Any], None]] = {
    Verb.identify: _render_identify,
    Verb.get_record: _render_get_record,
    Verb.list_identifiers: _render_list_identifiers,
    Verb.list_metadata_formats: _render_list_metadata_formats,
    Verb.list_records: _render_list_records,
    Verb.list_sets: _render_list_sets,
}


@dataclass(frozen=True)
class ProtocolResponse:
    """The OAI-PMH envelope: response date, request echo and either a payload or errors.

    ``request`` is ``None`` when the arguments did not validate; the echo then
    carries only the endpoint URL.
    """

    url: str
    outcome: Success[Any] | ProtocolFailure
    request: ProtocolRequest | None = None
    response_date: datetime = field(default_factory=now_utc)

    def __post_init__(self) -> None:
        if isinstance(self.outcome, InternalFailure):
            raise ValueError("Internal failures have no OAI-PMH envelope")
        if isinstance(self.outcome, Success) and self.request is None:
            raise ValueError("A successful response needs the validated request")

    @property
    def http_status(self) -> int:
        return self.outcome.http_status

    def to_xml(self) -> etree._Element:
        root = etree.Element(_oai("OAI-PMH"), nsmap={None: OAI_NS, "xsi": XSI_NS})
        root.set(f"{{{XSI_NS}}}schemaLocation", f"{OAI_NS} {OAI_SCHEMA}")
        append_text(root, _oai("responseDate"), format_datestamp(self.response_date))
        echo = append_text(root, _oai("request"), self.url)
        if self.request is not None:
            for name, value in self.request.echo_attributes().items():
                echo.set(name, value)

        if isinstance(self.outcome, ProtocolFailure):
            for error in self.outcome.errors:
                append_text(root, _oai("error"), error.message, code=error.code.value)
        elif self.request is not None:
            PAYLOAD_RENDERERS[self.request.verb](root, self.outcome.data)
        return root


def serialize(element: etree._Element) -> bytes:
    return etree.tostring(element, xml_declaration=True, encoding="UTF-8")
