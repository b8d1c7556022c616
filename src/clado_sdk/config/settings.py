"""Configuration settings for the Clado SDK.

Settings are loaded from ``CLADO_``-prefixed environment variables and
an optional ``.env`` file. A client reads them once, at construction.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.http.retry import RetryConfig

DEFAULT_BASE_URL = "https://search.clado.ai"


class CladoSettings(BaseSettings):
    """SDK settings loaded from environment variables.

    :param api_key: API key used as a bearer token (``CLADO_API_KEY``)
    :type api_key: Optional[str]
    :param base_url: API origin (``CLADO_BASE_URL``)
    :type base_url: str
    :param max_retries: Retries per call after the first attempt
    :type max_retries: int
    :param initial_retry_delay: First backoff delay in seconds
    :type initial_retry_delay: float
    :param max_retry_delay: Backoff ceiling in seconds
    :type max_retry_delay: float
    :param timeout: Per-request transport timeout in seconds
    :type timeout: float
    :param log_level: Level for :func:`~clado_sdk.utils.security.setup_secure_logging`
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="CLADO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    api_key: Optional[str] = Field(None, repr=False, description="Clado API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="Clado API base URL")

    # Retry policy
    max_retries: int = Field(3, ge=0, description="Retries per call")
    initial_retry_delay: float = Field(
        1.0, gt=0, description="First backoff delay in seconds"
    )
    max_retry_delay: float = Field(30.0, gt=0, description="Backoff ceiling in seconds")

    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths join cleanly."""
        return v.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only key as not set."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def retry_config(self) -> RetryConfig:
        """Build the retry policy described by these settings.

        :return: Retry configuration
        :rtype: RetryConfig
        """
        return RetryConfig(
            max_retries=self.max_retries,
            initial_delay=self.initial_retry_delay,
            max_delay=self.max_retry_delay,
        )
