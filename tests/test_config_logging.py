"""
Tests for settings validation and logging configuration.
"""

import json
import logging

import pytest
from pydantic import ValidationError

from expense_api.core.config import LEGACY_AUTH_TOKEN, Settings
from expense_api.shared.logging import (
    JsonFormatter,
    RequestIdFilter,
    configure_logging,
    request_id_ctx,
)
from expense_api.shared.security.auth import token_matches


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self) -> None:
        s = Settings(_env_file=None)

        assert s.store_backend == "sql"
        assert s.auth_token == LEGACY_AUTH_TOKEN
        assert s.shutdown_timeout_seconds == 5

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTH_TOKEN", "from-env")
        monkeypatch.setenv("STORE_BACKEND", "memory")
        monkeypatch.setenv("PORT", "8080")

        s = Settings(_env_file=None)

        assert (s.auth_token, s.store_backend, s.port) == ("from-env", "memory", 8080)

    def test_log_level_normalized(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"store_backend": "redis"},
            {"log_level": "LOUD"},
            {"port": 0},
            {"shutdown_timeout_seconds": -1},
            {"auth_token": ""},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)


class TestTokenMatching:
    """Tests for the shared-secret comparison."""

    def test_raw_value(self) -> None:
        assert token_matches("s3cret", "s3cret")

    def test_bearer_scheme_rejected(self) -> None:
        assert not token_matches("Bearer s3cret", "s3cret")

    @pytest.mark.parametrize("presented", ["s3cre", "S3CRET", "Bearer", "Basic s3cret"])
    def test_mismatch(self, presented: str) -> None:
        assert not token_matches(presented, "s3cret")


class TestLogging:
    """Tests for formatter output and request id stamping."""

    def _record(self, message: str = "hello") -> logging.LogRecord:
        record = logging.LogRecord(
            name="expense_api.test",
            level=logging.ERROR,
            pathname=__file__,
            lineno=42,
            msg=message,
            args=(),
            exc_info=None,
        )
        RequestIdFilter().filter(record)
        return record

    def test_request_id_defaults_to_dash(self) -> None:
        assert self._record().request_id == "-"

    def test_request_id_taken_from_context(self) -> None:
        token = request_id_ctx.set("abc123")
        try:
            assert self._record().request_id == "abc123"
        finally:
            request_id_ctx.reset(token)

    def test_json_formatter_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(self._record("stored")))

        assert payload["level"] == "error"
        assert payload["message"] == "stored"
        assert payload["logger"] == "expense_api.test"
        assert payload["linenumber"] == 42
        assert payload["request_id"] == "-"
        assert payload["timestamp"].endswith("Z")

    def test_configure_logging_json(self) -> None:
        configure_logging(level="DEBUG", json_output=True)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
