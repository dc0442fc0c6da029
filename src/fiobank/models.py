"""Data models for Fio account statements."""

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionReportFormat(str, Enum):
    """Formats accepted by the transaction report endpoints."""

    CSV = "csv"
    GPC = "gpc"
    HTML = "html"
    JSON = "json"
    OFX = "ofx"
    XML = "xml"

    def __str__(self) -> str:
        return self.value


class StatementFormat(str, Enum):
    """Formats accepted by the account statement endpoint."""

    CSV = "csv"
    GPC = "gpc"
    HTML = "html"
    JSON = "json"
    OFX = "ofx"
    XML = "xml"
    PDF = "pdf"
    MT940 = "mt940"
    CBA_XML = "cba_xml"
    SBA_XML = "sba_xml"

    def __str__(self) -> str:
        return self.value

    @property
    def is_binary(self) -> bool:
        """Return True if the API sends this format as raw bytes."""
        return self is StatementFormat.PDF


@dataclass(frozen=True)
class AccountInfo:
    """Account metadata attached to a statement or transaction report."""

    currency: str
    account_id: str | None = None
    bank_id: str | None = None
    iban: str | None = None
    bic: str | None = None
    opening_balance: Decimal | None = None
    closing_balance: Decimal | None = None
    date_start: date | None = None
    date_end: date | None = None
    year_list: int | None = None
    id_list: int | None = None
    id_from: int | None = None
    id_to: int | None = None
    id_last_download: int | None = None

    @property
    def period(self) -> tuple[date, date] | None:
        """Return (start, end) of the covered period if both are known."""
        if self.date_start is None or self.date_end is None:
            return None
        return self.date_start, self.date_end


@dataclass(frozen=True)
class Transaction:
    """A single movement on the account."""

    transaction_id: str
    date: date
    amount: Decimal
    currency: str
    account_id: str | None = None
    account_name: str | None = None
    bank_id: str | None = None
    bank_name: str | None = None
    constant_symbol: str | None = None
    variable_symbol: str | None = None
    specific_symbol: str | None = None
    user_identification: str | None = None
    remittance_info: str | None = None
    transaction_type: str | None = None
    executor: str | None = None
    specification: str | None = None
    comment: str | None = None
    bic: str | None = None
    order_id: int | None = None
    payer_reference: str | None = None

    @property
    def is_expense(self) -> bool:
        """Return True if money left the account."""
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        """Return True if money arrived on the account."""
        return self.amount > 0

    def to_dict(self) -> dict[str, str]:
        """Convert to a flat dictionary for CSV output."""
        row: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                row[f.name] = ""
            elif isinstance(value, date):
                row[f.name] = value.isoformat()
            else:
                row[f.name] = str(value)
        return row


@dataclass(frozen=True)
class AccountStatement:
    """Account metadata together with its transactions in source order."""

    info: AccountInfo
    transactions: tuple[Transaction, ...] = ()

    def __len__(self) -> int:
        return len(self.transactions)


@dataclass(frozen=True)
class LastStatementInfo:
    """Year and number of the most recent account statement."""

    year: int
    statement_id: int
