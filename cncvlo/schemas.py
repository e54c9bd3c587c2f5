from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class HealthDetailsResponse(BaseModel):
    status: str
    timestamp: datetime
    database_ok: bool
    published_records: int
    earliest_datestamp: datetime | None = None


class MetaResponse(BaseModel):
    service: str
    version: str
    repository_name: str
    base_url: str
    metadata_formats: list[str]
    timestamp: datetime
