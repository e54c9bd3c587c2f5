"""Parsing of raw OAI-PMH query parameters into typed requests."""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from cncvlo.enums import Verb
from cncvlo.services.oaipmh.errors import ErrorCode, ProtocolFailure

ARG_VERB = "verb"
ARG_IDENTIFIER = "identifier"
ARG_METADATA_PREFIX = "metadataPrefix"
ARG_FROM = "from"
ARG_UNTIL = "until"
ARG_SET = "set"
ARG_RESUMPTION_TOKEN = "resumptionToken"


@dataclass(frozen=True)
class VerbGrammar:
    required: frozenset[str]
    allowed: frozenset[str]


_LIST_ARGS = frozenset({ARG_METADATA_PREFIX, ARG_FROM, ARG_UNTIL, ARG_SET, ARG_RESUMPTION_TOKEN})

VERB_GRAMMAR: dict[Verb, VerbGrammar] = {
    Verb.identify: VerbGrammar(required=frozenset(), allowed=frozenset()),
    Verb.get_record: VerbGrammar(
        required=frozenset({ARG_IDENTIFIER, ARG_METADATA_PREFIX}),
        allowed=frozenset({ARG_IDENTIFIER, ARG_METADATA_PREFIX}),
    ),
    Verb.list_metadata_formats: VerbGrammar(required=frozenset(), allowed=frozenset({ARG_IDENTIFIER})),
    Verb.list_identifiers: VerbGrammar(required=frozenset({ARG_METADATA_PREFIX}), allowed=_LIST_ARGS),
    Verb.list_records: VerbGrammar(required=frozenset({ARG_METADATA_PREFIX}), allowed=_LIST_ARGS),
    Verb.list_sets: VerbGrammar(required=frozenset(), allowed=frozenset({ARG_RESUMPTION_TOKEN})),
}

# required arguments are reported in this order when several are missing
_ARGUMENT_ORDER = (ARG_IDENTIFIER, ARG_METADATA_PREFIX, ARG_FROM, ARG_UNTIL, ARG_SET, ARG_RESUMPTION_TOKEN)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
# RFC 3339 without fractional seconds, zone as Z or +hh:mm
DATESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:\d{2})")


class DateArgumentError(ValueError):
    pass


@dataclass(frozen=True)
class ProtocolRequest:
    url: str
    verb: Verb
    identifier: str | None = None
    metadata_prefix: str | None = None
    from_: datetime | None = None
    until: datetime | None = None
    until_exclusive: bool = False
    set_spec: str | None = None
    resumption_token: str | None = None
    raw_from: str | None = None
    raw_until: str | None = None

    def echo_attributes(self) -> dict[str, str]:
        values = {
            ARG_VERB: self.verb.value,
            ARG_IDENTIFIER: self.identifier,
            ARG_METADATA_PREFIX: self.metadata_prefix,
            ARG_FROM: self.raw_from,
            ARG_UNTIL: self.raw_until,
            ARG_SET: self.set_spec,
            ARG_RESUMPTION_TOKEN: self.resumption_token,
        }
        return {name: value for name, value in values.items() if value}


def parse_datestamp(value: str, *, upper_bound: bool = False) -> tuple[datetime, bool]:
    """Return the UTC instant of a ``from``/``until`` value and whether it is exclusive.

    A bare ``YYYY-MM-DD`` upper bound is moved to the start of the next day so
    that the whole day is harvested.
    """
    if "T" in value:
        if not DATESTAMP_PATTERN.fullmatch(value):
            raise DateArgumentError(f"Invalid datestamp `{value}`")
        try:
            parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
        except ValueError as exc:
            raise DateArgumentError(f"Invalid datestamp `{value}`") from exc
        return parsed.astimezone(UTC), False
    if not DATE_PATTERN.fullmatch(value):
        raise DateArgumentError(f"Invalid date `{value}`")
    try:
        day = datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=UTC)
    except ValueError as exc:
        raise DateArgumentError(f"Invalid date `{value}`") from exc
    if upper_bound:
        return day + timedelta(days=1), True
    return day, False


def _normalize(raw: Mapping[str, str | Sequence[str]]) -> dict[str, list[str]]:
    normalized: dict[str, list[str]] = {}
    for key, value in raw.items():
        normalized[key] = [value] if isinstance(value, str) else list(value)
    return normalized


def parse_arguments(raw: Mapping[str, str | Sequence[str]], *, url: str) -> ProtocolRequest | ProtocolFailure:
    """Validate the argument grammar of a request.

    Protocol errors are returned, a malformed ``from``/``until`` raises
    :class:`DateArgumentError`.
    """
    args = _normalize(raw)

    if ARG_VERB not in args:
        return ProtocolFailure.of(ErrorCode.bad_argument, f"Missing required argument `{ARG_VERB}`")
    raw_verb = args[ARG_VERB][0] if args[ARG_VERB] else ""
    try:
        verb = Verb(raw_verb)
    except ValueError:
        return ProtocolFailure.of(ErrorCode.bad_verb, f"Invalid verb `{raw_verb}`")

    grammar = VERB_GRAMMAR[verb]
    for name in _ARGUMENT_ORDER:
        if name in grammar.required and name not in args:
            return ProtocolFailure.of(
                ErrorCode.bad_argument, f"Missing required argument `{name}` for verb `{verb.value}`"
            )
    for name in args:
        if name != ARG_VERB and name not in grammar.allowed:
            return ProtocolFailure.of(ErrorCode.bad_argument, f"Invalid argument `{name}` for verb `{verb.value}`")
    for name, values in args.items():
        if len(values) > 1:
            return ProtocolFailure.of(ErrorCode.bad_argument, f"Repeated argument `{name}`")

    def single(name: str) -> str | None:
        values = args.get(name)
        return values[0] if values else None

    raw_from = single(ARG_FROM) or None
    raw_until = single(ARG_UNTIL) or None
    from_ = until = None
    until_exclusive = False
    if raw_from is not None:
        from_, _ = parse_datestamp(raw_from)
    if raw_until is not None:
        until, until_exclusive = parse_datestamp(raw_until, upper_bound=True)

    return ProtocolRequest(
        url=url,
        verb=verb,
        identifier=single(ARG_IDENTIFIER),
        metadata_prefix=single(ARG_METADATA_PREFIX),
        from_=from_,
        until=until,
        until_exclusive=until_exclusive,
        set_spec=single(ARG_SET),
        resumption_token=single(ARG_RESUMPTION_TOKEN),
        raw_from=raw_from,
        raw_until=raw_until,
    )
