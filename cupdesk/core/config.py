from __future__ import annotations

from datetime import timezone as dt_timezone
from datetime import tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

KNOWN_PLANS = ("72h", "1week")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CUPDESK_", extra="ignore")

    app_name: str = "Cupdesk Order & Production Dashboard"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    database_url: str = "sqlite+pysqlite:///./cupdesk.db"

    log_level: str = "INFO"
    # IANA zone name; the "today" bucket starts at midnight in this zone.
    timezone: str = "UTC"

    default_plan: str = Field(default="72h", description="plan shown when nothing is persisted")
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    def model_post_init(self, __context) -> None:
        if self.default_plan not in KNOWN_PLANS:
            raise ValueError(
                f"unsupported default_plan {self.default_plan!r}; set CUPDESK_DEFAULT_PLAN to one of: "
                + ", ".join(KNOWN_PLANS)
            )
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        try:
            self.local_timezone()
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {self.timezone!r}") from exc

    def local_timezone(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return dt_timezone.utc
        return ZoneInfo(self.timezone)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
