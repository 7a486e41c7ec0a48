import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from s3_request_signer.config import S3Settings
from s3_request_signer.dispatch import ExecuteOptions
from s3_request_signer.log import DEFAULT_FORMAT, setup_logging


@pytest.fixture
def aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("AWS_REGION", "us-west-2")


class TestS3Settings:
    def test_from_environment(self, aws_env: None) -> None:
        """Credentials and region are read from the environment."""
        settings = S3Settings(_env_file=None)

        assert settings.aws_access_key_id == "AKIDEXAMPLE"
        assert settings.aws_secret_access_key == "secret"
        assert settings.aws_region == "us-west-2"
        assert settings.log_level == "INFO"
        assert settings.execute_options == ExecuteOptions()

    def test_from_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Settings can come from a .env file."""
        for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION"):
            monkeypatch.delenv(name, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "AWS_ACCESS_KEY_ID=AKIDFILE\n"
            "AWS_SECRET_ACCESS_KEY=filesecret\n"
            "AWS_REGION=eu-west-1\n"
            "LOG_REQUESTS=true\n"
            "ECHO_REQUEST_TO_URL=http://echo.example/\n",
            encoding="utf-8",
        )

        settings = S3Settings(_env_file=env_file)

        assert settings.aws_access_key_id == "AKIDFILE"
        assert settings.aws_region == "eu-west-1"
        assert settings.execute_options == ExecuteOptions(
            log_requests=True, echo_request_to_url="http://echo.example/"
        )

    def test_missing_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Credentials are required."""
        for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(ValidationError):
            S3Settings(_env_file=None)

    def test_log_level_normalized(self, aws_env: None) -> None:
        """Log levels are upper-cased."""
        assert S3Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self, aws_env: None) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError, match="log_level must be one of"):
            S3Settings(log_level="loud", _env_file=None)

    def test_invalid_timeout(self, aws_env: None) -> None:
        """Timeouts must be positive."""
        with pytest.raises(ValidationError):
            S3Settings(request_timeout=0, _env_file=None)

    def test_configure_logging(
        self, aws_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The configured log level reaches the logging setup."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        S3Settings(log_level="warning", _env_file=None).configure_logging()

        assert len(calls) == 1
        assert calls[0]["level"] == logging.WARNING


class TestSetupLogging:
    def test_configures_root_logger(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """setup_logging passes the level, format and a stdout handler on."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        setup_logging("debug")

        assert len(calls) == 1
        assert calls[0]["level"] == logging.DEBUG
        assert calls[0]["format"] == DEFAULT_FORMAT
        assert isinstance(calls[0]["handlers"][0], logging.StreamHandler)

    def test_custom_format(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A custom format string is used when given."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        setup_logging(format_string="%(message)s")

        assert calls[0]["level"] == logging.INFO
        assert calls[0]["format"] == "%(message)s"
