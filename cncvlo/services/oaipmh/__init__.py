"""OAI-PMH 2.0 protocol engine: argument grammar, verb dispatch and response envelope."""

from cncvlo.services.oaipmh.arguments import DateArgumentError, ProtocolRequest, parse_arguments
from cncvlo.services.oaipmh.dispatch import RepositoryInfo, VerbDispatcher
from cncvlo.services.oaipmh.errors import ErrorCode, InternalFailure, ProtocolError, ProtocolFailure, Success
from cncvlo.services.oaipmh.handler import OAIResult, handle_oai_request, handle_self_link

__all__ = [
    "DateArgumentError",
    "ErrorCode",
    "InternalFailure",
    "OAIResult",
    "ProtocolError",
    "ProtocolFailure",
    "ProtocolRequest",
    "RepositoryInfo",
    "Success",
    "VerbDispatcher",
    "handle_oai_request",
    "handle_self_link",
    "parse_arguments",
]
