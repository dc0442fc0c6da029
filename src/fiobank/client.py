"""Fio banka API client."""

import logging
import re
from datetime import date

import requests

from fiobank.errors import (
    InvalidDateRangeError,
    InvalidParameterError,
    InvalidResponseError,
    InvalidTokenLengthError,
    TransportError,
    raise_for_status,
)
from fiobank.logconfig import REDACTED, redact_secret
from fiobank.models import (
    AccountInfo,
    AccountStatement,
    LastStatementInfo,
    StatementFormat,
    Transaction,
    TransactionReportFormat,
)
from fiobank.parser import (
    Document,
    parse_account_info,
    parse_statement,
    parse_transactions,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://fioapi.fio.cz/v1/rest"
DEFAULT_TIMEOUT = 10.0
TOKEN_LENGTH = 64

_INTEGER = re.compile(r"-?[0-9]+")


def mask_token(token: str) -> str:
    """Mask a token for display, showing only the last 4 characters."""
    if len(token) > 4:
        return f"****{token[-4:]}"
    return "****"


class FioClient:
    """Client for the Fio banka REST API.

    Every method performs exactly one GET request. The client keeps no
    per-call state, so a single instance can be shared between threads as
    far as the underlying requests session allows.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize client with a 64 character API token."""
        if len(token) != TOKEN_LENGTH:
            raise InvalidTokenLengthError(expected=TOKEN_LENGTH, actual=len(token))

        self._token = token
        redact_secret(token)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        logger.info("Initialized Fio API client for %s", self._base_url)

    def __repr__(self) -> str:
        return f"FioClient(token={mask_token(self._token)!r}, base_url={self._base_url!r})"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def _redact(self, path: str) -> str:
        return path.replace(self._token, REDACTED)

    def _get(self, path: str) -> requests.Response:
        """Make a GET request and classify the response status."""
        url = f"{self._base_url}{path}"
        logger.debug("GET request to %s%s", self._base_url, self._redact(path))

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            # requests puts the full URL into its messages
            raise TransportError(f"http error: {self._redact(str(e))}") from e

        logger.debug("Received status %s", response.status_code)
        raise_for_status(response.status_code)
        return response

    def _get_text(self, path: str) -> str:
        response = self._get(path)
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response.text

    def _get_binary(self, path: str) -> bytes:
        return self._get(path).content

    def fetch_transactions_for_period(
        self,
        date_from: date,
        date_to: date,
        fmt: TransactionReportFormat = TransactionReportFormat.JSON,
    ) -> str:
        """Fetch the transaction report for an inclusive date range.

        Args:
            date_from: First day of the period
            date_to: Last day of the period
            fmt: Requested report format

        Returns:
            Response body as text, unparsed

        Raises:
            InvalidDateRangeError: If date_from is after date_to
        """
        if date_from > date_to:
            raise InvalidDateRangeError(date_from, date_to)

        fmt = TransactionReportFormat(fmt)
        path = (
            f"/periods/{self._token}/{date_from.isoformat()}/"
            f"{date_to.isoformat()}/transactions.{fmt}"
        )
        logger.debug(
            "Fetching transaction report for period %s to %s as %s",
            date_from,
            date_to,
            fmt,
        )
        return self._get_text(path)

    def fetch_transactions_since_last_download(
        self,
        fmt: TransactionReportFormat = TransactionReportFormat.JSON,
    ) -> str:
        """Fetch transactions added since the last download marker."""
        fmt = TransactionReportFormat(fmt)
        path = f"/last/{self._token}/transactions.{fmt}"
        logger.debug("Fetching transaction report since last download as %s", fmt)
        return self._get_text(path)

    def fetch_account_statement(
        self,
        year: int,
        statement_id: int,
        fmt: StatementFormat = StatementFormat.JSON,
    ) -> str | bytes:
        """Fetch an account statement identified by year and number.

        Args:
            year: Statement year
            statement_id: Statement number within the year
            fmt: Requested statement format

        Returns:
            bytes for PDF, text for every other format

        Raises:
            InvalidParameterError: If statement_id is negative
        """
        if statement_id < 0:
            raise InvalidParameterError("statement_id must be a positive integer")

        fmt = StatementFormat(fmt)
        path = f"/by-id/{self._token}/{year}/{statement_id}/transactions.{fmt}"
        logger.debug(
            "Fetching account statement year=%s id=%s as %s", year, statement_id, fmt
        )
        if fmt.is_binary:
            return self._get_binary(path)
        return self._get_text(path)

    def fetch_last_statement_info(self) -> LastStatementInfo:
        """Get year and number of the most recent account statement.

        The API answers with a plain ``year,statement_id`` line.

        Raises:
            InvalidResponseError: If either field is missing or not an integer
        """
        path = f"/lastStatement/{self._token}/statement"
        logger.debug("Fetching last account statement metadata")
        body = self._get_text(path)

        parts = [part.strip() for part in body.split(",")]
        if len(parts) < 2 or not all(_INTEGER.fullmatch(p) for p in parts[:2]):
            raise InvalidResponseError(f"unexpected last statement response: {body!r}")

        return LastStatementInfo(year=int(parts[0]), statement_id=int(parts[1]))

    def set_last_downloaded_transaction_id(self, transaction_id: int) -> None:
        """Move the server-side download marker to a transaction id.

        Raises:
            InvalidParameterError: If transaction_id is negative
        """
        if transaction_id < 0:
            raise InvalidParameterError("transaction_id must be a positive integer")

        path = f"/set-last-id/{self._token}/{transaction_id}/"
        logger.info("Updating last downloaded transaction id to %s", transaction_id)
        self._get(path)

    def set_last_unsuccessful_download_date(self, download_date: date) -> None:
        """Move the server-side download marker to a date."""
        path = f"/set-last-date/{self._token}/{download_date.isoformat()}/"
        logger.info("Updating last unsuccessful download date to %s", download_date)
        self._get(path)

    def get_statement_for_period(self, date_from: date, date_to: date) -> AccountStatement:
        """Fetch and parse the JSON transaction report for a date range."""
        body = self.fetch_transactions_for_period(
            date_from, date_to, TransactionReportFormat.JSON
        )
        return parse_statement(body)

    def get_statement_since_last_download(self) -> AccountStatement:
        """Fetch and parse the JSON transaction report since the last download."""
        body = self.fetch_transactions_since_last_download(TransactionReportFormat.JSON)
        return parse_statement(body)

    def parse_account_info(self, document: Document) -> AccountInfo:
        """Parse account info from a JSON response returned by the API."""
        return parse_account_info(document)

    def parse_transactions(self, document: Document) -> list[Transaction]:
        """Parse transactions from a JSON response returned by the API."""
        return parse_transactions(document)
