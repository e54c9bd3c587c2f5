from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    # http://www.openarchives.org/OAI/openarchivesprotocol.html#ErrorConditions
    bad_argument = "badArgument"
    bad_resumption_token = "badResumptionToken"
    bad_verb = "badVerb"
    cannot_disseminate_format = "cannotDisseminateFormat"
    id_does_not_exist = "idDoesNotExist"
    no_records_match = "noRecordsMatch"
    no_metadata_formats = "noMetadataFormats"
    no_set_hierarchy = "noSetHierarchy"

    @property
    def http_status(self) -> int:
        return ERROR_HTTP_STATUS[self]


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.bad_argument: 400,
    ErrorCode.bad_resumption_token: 400,
    ErrorCode.bad_verb: 400,
    ErrorCode.cannot_disseminate_format: 400,
    ErrorCode.id_does_not_exist: 404,
    ErrorCode.no_records_match: 200,
    ErrorCode.no_metadata_formats: 404,
    ErrorCode.no_set_hierarchy: 501,
}


@dataclass(frozen=True)
class ProtocolError:
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    http_status: int = 200


@dataclass(frozen=True)
class ProtocolFailure:
    errors: tuple[ProtocolError, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("ProtocolFailure requires at least one error")

    @classmethod
    def of(cls, code: ErrorCode, message: str) -> "ProtocolFailure":
        return cls(errors=(ProtocolError(code=code, message=message),))

    @property
    def http_status(self) -> int:
        return self.errors[0].code.http_status


@dataclass(frozen=True)
class InternalFailure:
    detail: str
    http_status: int = 500


Outcome = Success[T] | ProtocolFailure | InternalFailure
