"""Tests for CLI logging configuration."""

import json
import logging
from collections.abc import Iterator

import pytest

from fiobank.logconfig import CustomJsonFormatter, redact_secret, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_plain_format(self) -> None:
        """Test a single stderr handler with the requested level."""
        setup_logging(logging.DEBUG)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, CustomJsonFormatter)

    def test_json_format(self) -> None:
        """Test JSON records carry level and service name."""
        setup_logging(json_format=True)

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, CustomJsonFormatter)

        record = logging.LogRecord(
            "fiobank.client", logging.WARNING, __file__, 1, "Received status %s", (409,), None
        )
        payload = json.loads(formatter.format(record))
        assert payload["message"] == "Received status 409"
        assert payload["level"] == "WARNING"
        assert payload["service"] == "fiobank"
        assert "timestamp" in payload


class TestRedaction:
    """Tests for the secret redacting handler filter."""

    def test_third_party_records_redacted(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test registered secrets are replaced in any logger's output."""
        secret = "s3cr3t" * 4
        setup_logging(logging.DEBUG)
        redact_secret(secret)

        logging.getLogger("urllib3.connectionpool").debug(
            '"GET /last/%s/transactions.json HTTP/1.1" 200 2', secret
        )

        err = capsys.readouterr().err
        assert secret not in err
        assert '"GET /last/<token>/transactions.json HTTP/1.1" 200 2' in err

    def test_other_records_untouched(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test messages without secrets are formatted as usual."""
        setup_logging(logging.INFO)
        redact_secret("never-logged-value")

        logging.getLogger("fiobank.client").info("Received status %s", 200)

        assert "INFO fiobank.client: Received status 200" in capsys.readouterr().err
