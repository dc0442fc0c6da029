"""fiobank - Client for the Fio banka REST API."""

from fiobank.client import FioClient
from fiobank.errors import (
    ApiError,
    ApiErrorKind,
    FioError,
    InvalidDateRangeError,
    InvalidParameterError,
    InvalidResponseError,
    InvalidTokenLengthError,
    TransportError,
)
from fiobank.models import (
    AccountInfo,
    AccountStatement,
    LastStatementInfo,
    StatementFormat,
    Transaction,
    TransactionReportFormat,
)
from fiobank.parser import parse_account_info, parse_statement, parse_transactions

__version__ = "0.1.0"
__all__ = [
    "AccountInfo",
    "AccountStatement",
    "ApiError",
    "ApiErrorKind",
    "FioClient",
    "FioError",
    "InvalidDateRangeError",
    "InvalidParameterError",
    "InvalidResponseError",
    "InvalidTokenLengthError",
    "LastStatementInfo",
    "StatementFormat",
    "Transaction",
    "TransactionReportFormat",
    "TransportError",
    "parse_account_info",
    "parse_statement",
    "parse_transactions",
]
