from datetime import UTC, datetime, tzinfo

from cncvlo.constants import OAI_DATESTAMP_FORMAT


def now_utc() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime, assumed_zone: tzinfo = UTC) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=assumed_zone)
    return value.astimezone(UTC)


def format_datestamp(value: datetime) -> str:
    return as_utc(value).strftime(OAI_DATESTAMP_FORMAT)
