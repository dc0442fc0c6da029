"""Tests for data models."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from fiobank.models import (
    AccountInfo,
    AccountStatement,
    StatementFormat,
    Transaction,
    TransactionReportFormat,
)


def make_transaction(**overrides: object) -> Transaction:
    values: dict[str, object] = {
        "transaction_id": "10001",
        "date": date(2023, 1, 2),
        "amount": Decimal("50.25"),
        "currency": "CZK",
    }
    values.update(overrides)
    return Transaction(**values)  # type: ignore[arg-type]


class TestTransaction:
    """Tests for Transaction model."""

    def test_optional_fields_default_to_none(self) -> None:
        """Test only the mandatory fields are needed."""
        tx = make_transaction()
        assert tx.variable_symbol is None
        assert tx.order_id is None

    def test_is_expense(self) -> None:
        """Test is_expense and is_income properties."""
        expense = make_transaction(amount=Decimal("-100"))
        income = make_transaction(amount=Decimal("100"))

        assert expense.is_expense is True
        assert expense.is_income is False
        assert income.is_expense is False
        assert income.is_income is True

    def test_immutable(self) -> None:
        """Test transactions cannot be modified."""
        tx = make_transaction()
        with pytest.raises(dataclasses.FrozenInstanceError):
            tx.amount = Decimal("1")  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        tx = make_transaction(variable_symbol="12345", order_id=77)
        result = tx.to_dict()

        assert result["transaction_id"] == "10001"
        assert result["date"] == "2023-01-02"
        assert result["amount"] == "50.25"
        assert result["variable_symbol"] == "12345"
        assert result["order_id"] == "77"
        assert result["comment"] == ""
        assert len(result) == 20


class TestAccountInfo:
    """Tests for AccountInfo model."""

    def test_period(self) -> None:
        """Test period needs both ends."""
        info = AccountInfo(
            currency="CZK", date_start=date(2023, 1, 1), date_end=date(2023, 1, 31)
        )
        assert info.period == (date(2023, 1, 1), date(2023, 1, 31))
        assert AccountInfo(currency="CZK", date_start=date(2023, 1, 1)).period is None

    def test_statement_length(self) -> None:
        """Test AccountStatement length counts transactions."""
        statement = AccountStatement(
            info=AccountInfo(currency="CZK"),
            transactions=(make_transaction(), make_transaction(transaction_id="2")),
        )
        assert len(statement) == 2


class TestFormats:
    """Tests for format enums."""

    def test_string_values(self) -> None:
        """Test formats render as their URL suffix."""
        assert str(TransactionReportFormat.JSON) == "json"
        assert f"{StatementFormat.CBA_XML}" == "cba_xml"
        assert StatementFormat("mt940") is StatementFormat.MT940

    def test_only_pdf_is_binary(self) -> None:
        """Test is_binary."""
        assert [f for f in StatementFormat if f.is_binary] == [StatementFormat.PDF]
