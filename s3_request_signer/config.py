"""Settings for S3Service, read from the environment or a .env file."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3_request_signer.dispatch import ExecuteOptions
from s3_request_signer.log import setup_logging

__all__ = ["S3Settings"]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class S3Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    aws_access_key_id: str = Field(..., description="AWS access key id")
    aws_secret_access_key: str = Field(..., description="AWS secret access key")
    aws_region: str = Field(..., description="Region the buckets live in")

    log_requests: bool = Field(
        default=False,
        description="Log every request/response exchange",
    )
    echo_request_to_url: Optional[str] = Field(
        default=None,
        description="Also send every request to this URL, for debugging",
    )
    request_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="HTTP timeout in seconds (empty means no timeout)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                "log_level must be one of: {}".format(sorted(VALID_LOG_LEVELS))
            )
        return v_upper

    @property
    def execute_options(self) -> ExecuteOptions:
        return ExecuteOptions(
            log_requests=self.log_requests,
            echo_request_to_url=self.echo_request_to_url,
        )

    def configure_logging(self) -> None:
        """Set up stdout logging at the configured log_level."""
        setup_logging(self.log_level)
