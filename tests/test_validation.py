from datetime import date, timedelta
from decimal import Decimal

import pytest

from errors import ValidationError
from models.expense import Expense, MAX_AMOUNT
from validation import normalize_notes, validate_category_name, validate_expense

TODAY = date(2025, 6, 1)


def _expense(**overrides):
    values = dict(
        id=None,
        amount=Decimal("10.00"),
        date=TODAY,
        category_id=1,
        notes="",
    )
    values.update(overrides)
    return Expense(**values)


def _known(category_id):
    return category_id == 1


class TestValidateExpense:
    """Tests for validate_expense."""

    def test_valid_expense(self):
        """Test that a valid expense passes and is copied."""
        expense = _expense(notes="  note  ")

        outcome = validate_expense(expense, _known, today=TODAY)

        assert outcome.ok is True
        assert outcome.message == ""
        assert outcome.expense.notes == "note"
        assert expense.notes == "  note  "

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-0.01"), Decimal("NaN")])
    def test_bad_amount(self, amount):
        """Test that non-positive and non-finite amounts fail."""
        outcome = validate_expense(_expense(amount=amount), _known, today=TODAY)

        assert outcome.ok is False
        assert outcome.message == "Amount must be greater than zero"
        assert outcome.expense is None

    def test_non_numeric_amount(self):
        """Test that a value that is not a number fails."""
        outcome = validate_expense(_expense(amount="ten"), _known, today=TODAY)

        assert outcome.ok is False
        assert outcome.message == "Amount must be a number"

    def test_int_amount_is_converted(self):
        """Test that integer amounts become Decimal."""
        outcome = validate_expense(_expense(amount=5), _known, today=TODAY)

        assert outcome.ok is True
        assert outcome.expense.amount == Decimal("5")

    def test_future_date(self):
        """Test that a date after the reference day fails."""
        outcome = validate_expense(
            _expense(date=TODAY + timedelta(days=1)), _known, today=TODAY
        )

        assert outcome.ok is False
        assert outcome.message == "Date cannot be in the future"

    def test_unknown_category(self):
        """Test that the category must exist."""
        outcome = validate_expense(_expense(category_id=2), _known, today=TODAY)

        assert outcome.ok is False
        assert outcome.message == "Selected category does not exist"

    def test_amount_checked_before_date(self):
        """Test that the first failing rule is reported."""
        outcome = validate_expense(
            _expense(amount=Decimal("0"), date=TODAY + timedelta(days=5)),
            _known,
            today=TODAY,
        )

        assert outcome.message == "Amount must be greater than zero"

    def test_amount_at_upper_bound(self):
        """Test that the largest amount passes and anything above it fails."""
        at_limit = validate_expense(_expense(amount=MAX_AMOUNT), _known, today=TODAY)
        above = validate_expense(
            _expense(amount=Decimal("9E+999999")), _known, today=TODAY
        )

        assert at_limit.ok is True
        assert above.ok is False
        assert above.message == "Amount is too large"

    def test_amount_with_underscores(self):
        """Test that digit-group underscores are not accepted."""
        outcome = validate_expense(_expense(amount="1_000"), _known, today=TODAY)

        assert outcome.ok is False
        assert outcome.message == "Amount must be a number"


class TestNormalizeNotes:
    """Tests for normalize_notes."""

    def test_none(self):
        assert normalize_notes(None) == ""

    def test_truncates_after_trimming(self):
        assert normalize_notes("  " + "x" * 510 + "  ") == "x" * 500


class TestValidateCategoryName:
    """Tests for validate_category_name."""

    def test_trims(self):
        assert validate_category_name("  Food ") == "Food"

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_empty(self, name):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_category_name(name)

    def test_max_length(self):
        assert validate_category_name("x" * 100) == "x" * 100
        with pytest.raises(ValidationError, match="100 characters"):
            validate_category_name("x" * 101)
