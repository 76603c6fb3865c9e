from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import TimeUnit
from .urls import DOCUMENT_CREATE_URL


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_CLIENT_ prefix.
    For example:
        - CRPT_CLIENT_REQUEST_LIMIT=10
        - CRPT_CLIENT_TIME_UNIT=MINUTES
        - CRPT_CLIENT_API_URL=https://markirovka.sandbox.crptech.ru/api/v3/lk/documents/create
        - CRPT_CLIENT_HTTP_TIMEOUT_SECONDS=5

    Alternatively, settings can be provided programmatically:
        client = CrptClient(time_unit=TimeUnit.SECONDS, request_limit=5)
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_CLIENT_",
        case_sensitive=False,
        extra="forbid",
    )

    api_url: str = Field(
        default=DOCUMENT_CREATE_URL,
        description="Endpoint that receives document creation requests",
    )

    time_unit: TimeUnit = Field(
        default=TimeUnit.SECONDS,
        description="Length of the throttle window (one unit of time)",
    )

    request_limit: int = Field(
        default=5,
        ge=1,
        description="Maximum number of requests sent within one window",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for a single HTTP request in seconds",
    )

    max_workers: int = Field(
        default=8,
        ge=1,
        description="Worker threads used for batch submission",
    )

    @field_validator("time_unit", mode="before")
    @classmethod
    def _parse_time_unit(cls, value: object) -> object:
        if isinstance(value, str):
            return TimeUnit.from_str(value)
        return value

    @property
    def window_seconds(self) -> float:
        return self.time_unit.seconds
