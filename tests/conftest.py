"""Pytest configuration and fixtures."""

import copy
import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

# Fake 64 character token used by client tests
TEST_TOKEN = "a1b2c3d4" * 8

SAMPLE_INFO: dict[str, Any] = {
    "accountId": "2000000000",
    "bankId": "2010",
    "currency": "CZK",
    "iban": "CZ1000000000002000000000",
    "bic": "FIOZSKBA",
    "openingBalance": "100.00",
    "closingBalance": "200.00",
    "dateStart": "2023-01-01+0000",
    "dateEnd": "2023-01-02+0000",
    "yearList": 2023,
    "idList": 1,
    "idFrom": 123,
    "idTo": 124,
    "idLastDownload": 124,
}

MINIMAL_ROW: dict[str, Any] = {
    "column22": {"value": 10001},
    "column0": {"value": "2023-01-02+0000"},
    "column1": {"value": "50.25"},
    "column14": {"value": "CZK"},
}


def make_document(
    rows: list[Any] | None = None,
    info: dict[str, Any] | None = None,
) -> str:
    """Build a Fio JSON statement with the given rows and info."""
    return json.dumps({
        "accountStatement": {
            "info": SAMPLE_INFO if info is None else info,
            "transactionList": {
                "transaction": [MINIMAL_ROW] if rows is None else rows,
            },
        }
    })


def make_row(**columns: Any) -> dict[str, Any]:
    """Copy the minimal row and set (or remove, with None) column values.

    Keyword names are column numbers prefixed with ``c``, e.g. ``c5="123"``.
    """
    row = copy.deepcopy(MINIMAL_ROW)
    for name, value in columns.items():
        key = f"column{name[1:]}"
        if value is None:
            row.pop(key, None)
        else:
            row[key] = {"value": value}
    return row


def make_response(
    status_code: int = 200,
    text: str = "",
    content: bytes = b"",
    content_type: str = "application/json;charset=UTF-8",
) -> MagicMock:
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = content
    response.headers = {"Content-Type": content_type}
    return response


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def statement_file(fixtures_dir: Path) -> Path:
    """Return path to the sample JSON statement."""
    return fixtures_dir / "statement.json"


@pytest.fixture
def statement_json(statement_file: Path) -> str:
    """Return the sample JSON statement as text."""
    return statement_file.read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep real tokens and config files out of the tests.

    The CLI loads .env files into os.environ, so the whole environment is
    restored afterwards.
    """
    monkeypatch.delenv("FIO_API_TOKEN", raising=False)
    monkeypatch.delenv("FIO_API_BASE_URL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    with patch.dict(os.environ):
        yield
