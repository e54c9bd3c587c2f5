import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from cncvlo.enums import Verb
from cncvlo.services.oaipmh.arguments import DateArgumentError, ProtocolRequest, parse_arguments
from cncvlo.services.oaipmh.dispatch import VerbDispatcher
from cncvlo.services.oaipmh.envelope import ProtocolResponse, serialize
from cncvlo.services.oaipmh.errors import InternalFailure, ProtocolFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OAIResult:
    http_status: int
    body: bytes | None = None


def handle_oai_request(
    params: Mapping[str, str | Sequence[str]],
    *,
    url: str,
    dispatcher: VerbDispatcher,
) -> OAIResult:
    try:
        parsed = parse_arguments(params, url=url)
    except DateArgumentError:
        logger.exception("Failed to handle OAI-PMH request")
        return OAIResult(http_status=500)

    if isinstance(parsed, ProtocolFailure):
        response = ProtocolResponse(url=url, outcome=parsed)
        return OAIResult(http_status=response.http_status, body=serialize(response.to_xml()))

    outcome = dispatcher.dispatch(parsed)
    if isinstance(outcome, InternalFailure):
        return OAIResult(http_status=outcome.http_status)
    response = ProtocolResponse(url=url, outcome=outcome, request=parsed)
    return OAIResult(http_status=response.http_status, body=serialize(response.to_xml()))


def handle_self_link(record_id: str, metadata_prefix: str, *, url: str, dispatcher: VerbDispatcher) -> OAIResult:
    request = ProtocolRequest(url=url, verb=Verb.get_record, identifier=record_id, metadata_prefix=metadata_prefix)
    outcome = dispatcher.dispatch(request)
    if isinstance(outcome, InternalFailure | ProtocolFailure):
        return OAIResult(http_status=outcome.http_status)
    return OAIResult(http_status=outcome.http_status, body=serialize(outcome.data.metadata.to_xml()))
