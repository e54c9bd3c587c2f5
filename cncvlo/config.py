import json
import logging
import re
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cncvlo.constants import DEFAULT_SEARCH_PAGE_URL

logger = logging.getLogger(__name__)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# KonText installations outside CNC may name these differently
KONTEXT_NAME_DEFAULTS = {
    "corpora_table_name": "kontext_corpus",
    "user_table_name": "kontext_user",
    "user_firstname_col": "firstname",
    "user_lastname_col": "lastname",
}
SQL_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    base_url: str = Field(alias="BASE_URL")

    repository_name: str = Field(default="CNC VLO repository", alias="REPOSITORY_NAME")
    admin_email: str = Field(default="", alias="ADMIN_EMAIL")
    publisher: str = Field(default="", alias="PUBLISHER")
    search_page_url: str = Field(default=DEFAULT_SEARCH_PAGE_URL, alias="SEARCH_PAGE_URL")
    db_time_zone: str = Field(default="UTC", alias="DB_TIME_ZONE")

    corpora_table_name: str = Field(default=KONTEXT_NAME_DEFAULTS["corpora_table_name"], alias="CORPORA_TABLE_NAME")
    user_table_name: str = Field(default=KONTEXT_NAME_DEFAULTS["user_table_name"], alias="USER_TABLE_NAME")
    user_firstname_col: str = Field(default=KONTEXT_NAME_DEFAULTS["user_firstname_col"], alias="USER_FIRSTNAME_COL")
    user_lastname_col: str = Field(default=KONTEXT_NAME_DEFAULTS["user_lastname_col"], alias="USER_LASTNAME_COL")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, alias="LOG_FILE")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required")
        if not self.base_url.strip():
            raise ValueError("BASE_URL is required")
        self.base_url = self.base_url.strip().rstrip("/")
        if self.admin_email.strip().startswith("["):
            try:
                json.loads(self.admin_email)
            except ValueError as exc:
                raise ValueError("ADMIN_EMAIL is not a valid JSON list") from exc
        try:
            ZoneInfo(self.db_time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"DB_TIME_ZONE is not a known time zone: {self.db_time_zone}") from exc
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(LOG_LEVELS)}")
        if "{name}" not in self.search_page_url:
            raise ValueError("SEARCH_PAGE_URL must contain the {name} placeholder")
        for field_name in KONTEXT_NAME_DEFAULTS:
            if not SQL_IDENTIFIER.fullmatch(getattr(self, field_name)):
                raise ValueError(f"{field_name.upper()} must be a plain SQL identifier")
        return self

    @property
    def admin_emails(self) -> list[str]:
        value = self.admin_email.strip()
        emails = json.loads(value) if value.startswith("[") else value.split(",")
        return [str(email).strip() for email in emails if str(email).strip()]

    @property
    def oai_url(self) -> str:
        return f"{self.base_url}/oai"

    def time_zone(self) -> ZoneInfo:
        return ZoneInfo(self.db_time_zone)

    def kontext_overrides(self) -> dict[str, str]:
        return {
            field_name: getattr(self, field_name)
            for field_name, default in KONTEXT_NAME_DEFAULTS.items()
            if getattr(self, field_name) != default
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    if not settings.admin_emails:
        logger.warning("ADMIN_EMAIL not specified, Identify will report no admin contact")
    if not settings.publisher:
        logger.warning("PUBLISHER not specified, records will be published without a publisher")
    for field_name, value in settings.kontext_overrides().items():
        logger.warning("Overriding default %s to '%s'", field_name.upper(), value)
    return settings
