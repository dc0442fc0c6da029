"""Decoding of Fio JSON statements into typed records.

Fio sends each transaction as a mapping of ``column<N>`` keys to
``{"value": ...}`` wrappers, where the value may be a string, a number or a
boolean regardless of the column. Each wrapper is turned into a
:class:`ColumnValue` and coerced to the target field's type through the
:data:`TRANSACTION_COLUMNS` table.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from fiobank.errors import InvalidResponseError
from fiobank.models import AccountInfo, AccountStatement, Transaction
from fiobank.utils import format_number, is_int64, parse_amount, parse_date

logger = logging.getLogger(__name__)

Document = str | bytes


class ValueKind(Enum):
    """JSON type found under a column's ``value`` key."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OTHER = "other"


@dataclass(frozen=True)
class ColumnValue:
    """Tagged scalar taken from a transaction column."""

    kind: ValueKind
    raw: Any

    @classmethod
    def wrap(cls, raw: Any) -> "ColumnValue":
        """Tag a decoded JSON value with its kind."""
        # bool is a subclass of int, check it first
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, str):
            return cls(ValueKind.STRING, raw)
        if isinstance(raw, (int, Decimal)):
            return cls(ValueKind.NUMBER, raw)
        return cls(ValueKind.OTHER, raw)

    def as_text(self) -> str | None:
        """Coerce to text; arrays, objects and null are absent."""
        if self.kind is ValueKind.STRING:
            return str(self.raw)
        if self.kind is ValueKind.NUMBER:
            return format_number(self.raw)
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.raw else "false"
        return None

    def as_decimal(self) -> Decimal | None:
        """Coerce to an exact amount; only numeric literals qualify."""
        if self.kind is ValueKind.NUMBER:
            return Decimal(self.raw)
        if self.kind is ValueKind.STRING:
            return parse_amount(self.raw)
        return None

    def as_int(self) -> int | None:
        """Coerce to a 64-bit integer; anything else is absent."""
        if self.kind is ValueKind.NUMBER and is_int64(self.raw):
            return int(self.raw)
        return None

    def as_date(self) -> date | None:
        """Coerce a YYYY-MM-DD prefixed string to a date."""
        if self.kind is ValueKind.STRING:
            return parse_date(self.raw)
        return None


@dataclass(frozen=True)
class Column:
    """Binding of a numeric column key to a Transaction field."""

    field: str
    coerce: Callable[[ColumnValue], Any]
    required: bool = False

    @property
    def label(self) -> str:
        return self.field.replace("_", " ")


TRANSACTION_COLUMNS: dict[int, Column] = {
    22: Column("transaction_id", ColumnValue.as_text, required=True),
    0: Column("date", ColumnValue.as_date, required=True),
    1: Column("amount", ColumnValue.as_decimal, required=True),
    14: Column("currency", ColumnValue.as_text, required=True),
    2: Column("account_id", ColumnValue.as_text),
    10: Column("account_name", ColumnValue.as_text),
    3: Column("bank_id", ColumnValue.as_text),
    12: Column("bank_name", ColumnValue.as_text),
    4: Column("constant_symbol", ColumnValue.as_text),
    5: Column("variable_symbol", ColumnValue.as_text),
    6: Column("specific_symbol", ColumnValue.as_text),
    7: Column("user_identification", ColumnValue.as_text),
    16: Column("remittance_info", ColumnValue.as_text),
    8: Column("transaction_type", ColumnValue.as_text),
    9: Column("executor", ColumnValue.as_text),
    18: Column("specification", ColumnValue.as_text),
    25: Column("comment", ColumnValue.as_text),
    26: Column("bic", ColumnValue.as_text),
    17: Column("order_id", ColumnValue.as_int),
    27: Column("payer_reference", ColumnValue.as_text),
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not allowed")


def _load_statement(document: Document) -> dict[str, Any]:
    """Decode JSON and return the ``accountStatement`` object."""
    try:
        data = json.loads(
            document,
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
    except (TypeError, ValueError) as e:
        raise InvalidResponseError(f"response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidResponseError("response is not a JSON object")

    statement = data.get("accountStatement")
    if not isinstance(statement, dict):
        raise InvalidResponseError("response has no accountStatement object")

    if not isinstance(statement.get("info"), dict):
        raise InvalidResponseError("accountStatement has no info object")

    return statement


def _read_column(row: dict[str, Any], number: int) -> ColumnValue | None:
    """Return the wrapped value of a column, or None if the column is absent."""
    wrapper = row.get(f"column{number}")
    if wrapper is None:
        return None
    if not isinstance(wrapper, dict) or "value" not in wrapper:
        raise InvalidResponseError(f"column{number} is not a value wrapper")
    return ColumnValue.wrap(wrapper["value"])


def decode_transaction(row: Any) -> Transaction:
    """
    Decode one transaction row.

    Args:
        row: Decoded JSON object of a single transaction

    Returns:
        Transaction built from the known columns

    Raises:
        InvalidResponseError: If a mandatory column is missing or cannot be
            coerced to its type
    """
    if not isinstance(row, dict):
        raise InvalidResponseError("transaction entry is not an object")

    values: dict[str, Any] = {}
    for number, column in TRANSACTION_COLUMNS.items():
        cell = _read_column(row, number)
        value = column.coerce(cell) if cell is not None else None

        # Fio emits empty strings instead of leaving optional columns out
        if value == "" and not column.required:
            value = None

        if value is None and column.required:
            raise InvalidResponseError(
                f"transaction is missing {column.label} (column{number})"
            )
        values[column.field] = value

    return Transaction(**values)


def _info_string(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


def _info_required_string(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


def _info_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    cell = ColumnValue.wrap(value)
    if cell.kind not in (ValueKind.NUMBER, ValueKind.STRING):
        raise TypeError(f"expected number, got {type(value).__name__}")
    amount = cell.as_decimal()
    if amount is None:
        raise TypeError(f"{value!r} is not a decimal number")
    return amount


def _info_date(value: Any) -> date | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected date string, got {type(value).__name__}")
    return parse_date(value)


def _info_int(bits: int) -> Callable[[Any], int | None]:
    limit = 2 ** (bits - 1)

    def convert(value: Any) -> int | None:
        if value is None:
            return None
        if not is_int64(value) or not -limit <= value < limit:
            raise TypeError(f"expected {bits}-bit integer, got {value!r}")
        return int(value)

    return convert


INFO_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "accountId": ("account_id", _info_string),
    "bankId": ("bank_id", _info_string),
    "currency": ("currency", _info_required_string),
    "iban": ("iban", _info_string),
    "bic": ("bic", _info_string),
    "openingBalance": ("opening_balance", _info_decimal),
    "closingBalance": ("closing_balance", _info_decimal),
    "dateStart": ("date_start", _info_date),
    "dateEnd": ("date_end", _info_date),
    "yearList": ("year_list", _info_int(32)),
    "idList": ("id_list", _info_int(32)),
    "idFrom": ("id_from", _info_int(64)),
    "idTo": ("id_to", _info_int(64)),
    "idLastDownload": ("id_last_download", _info_int(64)),
}


def decode_account_info(info: dict[str, Any]) -> AccountInfo:
    """Decode the ``info`` object of a statement."""
    values: dict[str, Any] = {}
    for key, (field, convert) in INFO_FIELDS.items():
        try:
            values[field] = convert(info.get(key))
        except TypeError as e:
            raise InvalidResponseError(f"info field {key}: {e}") from e

    if values["currency"] is None:
        raise InvalidResponseError("info field currency is missing")

    return AccountInfo(**values)


def _decode_transaction_list(statement: dict[str, Any]) -> list[Transaction]:
    transaction_list = statement.get("transactionList")
    if not isinstance(transaction_list, dict):
        raise InvalidResponseError("accountStatement has no transactionList object")

    rows = transaction_list.get("transaction")
    if not isinstance(rows, list):
        raise InvalidResponseError("transactionList has no transaction array")

    return [decode_transaction(row) for row in rows]


def parse_account_info(document: Document) -> AccountInfo:
    """
    Parse account metadata from a Fio JSON response.

    Args:
        document: Raw JSON text or bytes

    Returns:
        AccountInfo from the statement's ``info`` object

    Raises:
        InvalidResponseError: If the document is not valid JSON or does not
            match the statement schema
    """
    statement = _load_statement(document)
    info = decode_account_info(statement["info"])
    logger.debug("Parsed account info")
    return info


def parse_transactions(document: Document) -> list[Transaction]:
    """
    Parse transactions from a Fio JSON response, in source order.

    Decoding is all-or-nothing: the first row that fails mandatory field
    decoding aborts the whole call.

    Args:
        document: Raw JSON text or bytes

    Returns:
        List of Transaction objects

    Raises:
        InvalidResponseError: If the document or any transaction is invalid
    """
    statement = _load_statement(document)
    transactions = _decode_transaction_list(statement)
    logger.debug("Parsed %d transactions", len(transactions))
    return transactions


def parse_statement(document: Document) -> AccountStatement:
    """Parse both account metadata and transactions from a Fio JSON response."""
    statement = _load_statement(document)
    info = decode_account_info(statement["info"])
    transactions = _decode_transaction_list(statement)
    logger.debug("Parsed statement with %d transactions", len(transactions))
    return AccountStatement(info=info, transactions=tuple(transactions))
