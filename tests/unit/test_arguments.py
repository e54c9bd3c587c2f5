from datetime import UTC, datetime

import pytest

from cncvlo.enums import Verb
from cncvlo.services.oaipmh import DateArgumentError, ErrorCode, ProtocolFailure, ProtocolRequest, parse_arguments

URL = "http://vlo.test/oai"


def _error_code(result) -> ErrorCode:
    assert isinstance(result, ProtocolFailure)
    return result.errors[0].code


def test_missing_verb_is_bad_argument():
    assert _error_code(parse_arguments({}, url=URL)) == ErrorCode.bad_argument


def test_unknown_verb_is_bad_verb():
    result = parse_arguments({"verb": "Harvest"}, url=URL)
    assert _error_code(result) == ErrorCode.bad_verb
    assert result.http_status == 400


def test_identify_accepts_no_arguments():
    result = parse_arguments({"verb": "Identify"}, url=URL)
    assert isinstance(result, ProtocolRequest)
    assert result.verb == Verb.identify
    assert result.echo_attributes() == {"verb": "Identify"}


def test_identify_rejects_extra_argument():
    assert _error_code(parse_arguments({"verb": "Identify", "identifier": "1"}, url=URL)) == ErrorCode.bad_argument


@pytest.mark.parametrize(
    "params",
    [
        {"verb": "GetRecord", "identifier": "1"},
        {"verb": "GetRecord", "metadataPrefix": "oai_dc"},
        {"verb": "ListRecords"},
        {"verb": "ListIdentifiers", "from": "2024-01-01"},
    ],
)
def test_missing_required_argument(params):
    assert _error_code(parse_arguments(params, url=URL)) == ErrorCode.bad_argument


@pytest.mark.parametrize(
    "params",
    [
        {"verb": "GetRecord", "identifier": "1", "metadataPrefix": "oai_dc", "from": "2024-01-01"},
        {"verb": "ListMetadataFormats", "metadataPrefix": "oai_dc"},
        {"verb": "ListSets", "set": "corpora"},
        {"verb": "ListRecords", "metadataPrefix": "oai_dc", "identifier": "1"},
    ],
)
def test_argument_not_allowed_for_verb(params):
    assert _error_code(parse_arguments(params, url=URL)) == ErrorCode.bad_argument


def test_repeated_argument_is_bad_argument():
    params = {"verb": ["ListRecords"], "metadataPrefix": ["oai_dc", "cmdi"]}
    assert _error_code(parse_arguments(params, url=URL)) == ErrorCode.bad_argument


def test_get_record_arguments():
    result = parse_arguments({"verb": "GetRecord", "identifier": "12", "metadataPrefix": "cmdi"}, url=URL)
    assert isinstance(result, ProtocolRequest)
    assert result.identifier == "12"
    assert result.metadata_prefix == "cmdi"
    assert result.url == URL


def test_list_sets_accepts_resumption_token():
    result = parse_arguments({"verb": "ListSets", "resumptionToken": "abc"}, url=URL)
    assert isinstance(result, ProtocolRequest)
    assert result.resumption_token == "abc"


def test_bare_until_covers_the_whole_day():
    result = parse_arguments(
        {"verb": "ListRecords", "metadataPrefix": "oai_dc", "from": "2024-01-10", "until": "2024-01-15"},
        url=URL,
    )
    assert isinstance(result, ProtocolRequest)
    assert result.from_ == datetime(2024, 1, 10, tzinfo=UTC)
    assert result.until == datetime(2024, 1, 16, tzinfo=UTC)
    assert result.until_exclusive is True
    assert result.echo_attributes()["until"] == "2024-01-15"


def test_full_datestamp_is_inclusive_and_normalized_to_utc():
    result = parse_arguments(
        {"verb": "ListIdentifiers", "metadataPrefix": "oai_dc", "until": "2024-01-15T12:00:00+02:00"},
        url=URL,
    )
    assert isinstance(result, ProtocolRequest)
    assert result.until == datetime(2024, 1, 15, 10, 0, tzinfo=UTC)
    assert result.until_exclusive is False


@pytest.mark.parametrize(
    "value",
    [
        "yesterday",
        "2024-13-01",
        "2024-1-5",
        "2024-01-15T10:00:00",
        "2024-01-15T25:00:00Z",
        "2024-01-15T10Z",
        "2024-01-15T10:00:00.5Z",
        "2024-01-15T10:00:00+0200",
    ],
)
def test_malformed_date_raises(value):
    with pytest.raises(DateArgumentError):
        parse_arguments({"verb": "ListRecords", "metadataPrefix": "oai_dc", "from": value}, url=URL)


def test_grammar_errors_win_over_date_errors():
    result = parse_arguments({"verb": "ListRecords", "from": "yesterday"}, url=URL)
    assert _error_code(result) == ErrorCode.bad_argument


def test_zulu_datestamp():
    result = parse_arguments(
        {"verb": "ListRecords", "metadataPrefix": "oai_dc", "from": "2024-01-15T10:00:00Z"}, url=URL
    )
    assert isinstance(result, ProtocolRequest)
    assert result.from_ == datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


def test_missing_argument_is_named_in_message():
    result = parse_arguments({"verb": "GetRecord", "identifier": "1"}, url=URL)
    assert _error_code(result) == ErrorCode.bad_argument
    assert result.errors[0].message == "Missing required argument `metadataPrefix` for verb `GetRecord`"


def test_disallowed_argument_is_named_in_message():
    result = parse_arguments({"verb": "Identify", "foo": "bar"}, url=URL)
    assert _error_code(result) == ErrorCode.bad_argument
    assert result.errors[0].message == "Invalid argument `foo` for verb `Identify`"
