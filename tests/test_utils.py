"""Tests for utility functions."""

from datetime import date
from decimal import Decimal

from fiobank.errors import ApiError, ApiErrorKind, raise_for_status
from fiobank.utils import format_number, is_int64, parse_amount, parse_date


class TestParseDate:
    """Tests for parse_date function."""

    def test_plain_date(self) -> None:
        """Test YYYY-MM-DD format."""
        assert parse_date("2026-01-30") == date(2026, 1, 30)

    def test_timezone_suffix(self) -> None:
        """Test suffix after the first 10 characters is dropped."""
        assert parse_date("2023-01-02+0100") == date(2023, 1, 2)
        assert parse_date("2023-01-02T10:00:00Z") == date(2023, 1, 2)

    def test_too_short(self) -> None:
        """Test strings shorter than 10 characters fail."""
        assert parse_date("2023-1-2") is None
        assert parse_date("") is None

    def test_invalid_date(self) -> None:
        """Test invalid dates return None."""
        assert parse_date("not a date") is None
        assert parse_date("2023-02-30") is None
        assert parse_date("30/01/2026") is None

    def test_rejects_non_ascii_digits(self) -> None:
        """Test only ASCII digits form a date."""
        assert parse_date("\u0662\u0660\u0662\u0663-01-02") is None


class TestParseAmount:
    """Tests for parse_amount function."""

    def test_simple_amount(self) -> None:
        """Test simple numeric amount."""
        assert parse_amount("123.45") == Decimal("123.45")
        assert parse_amount("100") == Decimal("100")
        assert parse_amount("-0.5") == Decimal("-0.5")

    def test_keeps_scale(self) -> None:
        """Test trailing zeros are preserved."""
        assert str(parse_amount("100.00")) == "100.00"

    def test_rejects_non_literals(self) -> None:
        """Test anything but a plain literal returns None."""
        assert parse_amount("") is None
        assert parse_amount("1,234.56") is None
        assert parse_amount("1e5") is None
        assert parse_amount("Infinity") is None
        assert parse_amount("CZK 10") is None

    def test_rejects_non_ascii_digits(self) -> None:
        """Test digits outside 0-9 are not amounts."""
        assert parse_amount("\u0665\u0660.\u0662\u0665") is None
        assert parse_amount("\uff15\uff10") is None

    def test_rejects_padding(self) -> None:
        """Test surrounding whitespace is not stripped."""
        assert parse_amount(" 50.25") is None
        assert parse_amount("50.25\n") is None


class TestNumbers:
    """Tests for number helpers."""

    def test_format_number(self) -> None:
        """Test canonical decimal text."""
        assert format_number(10001) == "10001"
        assert format_number(Decimal("50.25")) == "50.25"
        assert format_number(Decimal("1E+5")) == "100000"

    def test_is_int64(self) -> None:
        """Test 64-bit range and type checks."""
        assert is_int64(0)
        assert is_int64(-(2**63))
        assert not is_int64(2**63)
        assert not is_int64(True)
        assert not is_int64(Decimal("1"))
        assert not is_int64("1")


class TestRaiseForStatus:
    """Tests for raise_for_status."""

    def test_success(self) -> None:
        """Test 2xx does not raise."""
        raise_for_status(200)
        raise_for_status(299)

    def test_from_status(self) -> None:
        """Test unmapped codes keep the literal code."""
        error = ApiError.from_status(418)
        assert error.kind is ApiErrorKind.UNEXPECTED_STATUS
        assert error.status_code == 418
        assert "418" in str(error)
