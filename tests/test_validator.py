"""Tests for the two-stage TransactionValidator."""

from datetime import date
from decimal import Decimal

import pytest

from ledger.validation import TransactionValidator


@pytest.fixture
def validator():
    return TransactionValidator(today=date(2025, 3, 10))


def _fields(**overrides):
    fields = {
        "type": "Expense",
        "category": "Custos Diretos",
        "date": date(2025, 3, 7),
        "amount": Decimal("500"),
    }
    fields.update(overrides)
    return fields


class TestSchemaStage:
    """Stage 1: building the draft."""

    def test_valid_fields(self, validator):
        draft, result = validator.validate_fields(_fields())
        assert draft is not None
        assert result.is_valid
        assert result.issues == []

    def test_unknown_type(self, validator):
        draft, result = validator.validate_fields(_fields(type="Despesa"))
        assert draft is None
        assert not result.is_valid
        assert result.first_error.field == "type"

    def test_missing_category(self, validator):
        fields = _fields()
        del fields["category"]
        draft, result = validator.validate_fields(fields)
        assert draft is None
        assert result.first_error.field == "category"

    def test_semantic_stage_skipped_on_schema_error(self, validator):
        """Only schema issues are reported when the draft cannot be built."""
        _, result = validator.validate_fields(_fields(type="Despesa", amount=Decimal("0")))
        assert all(issue.issue_type != "zero_amount" for issue in result.issues)


class TestSemanticStage:
    """Stage 2: business rules."""

    def test_category_outside_chart(self, validator):
        draft, result = validator.validate_fields(_fields(category="Vendas de Produtos"))
        assert draft is None
        assert result.first_error.issue_type == "invalid_category"
        assert "Custos Diretos" in result.first_error.suggested_fix

    def test_negative_amount_after_edit(self, validator, make_transaction):
        """model_copy bypasses pydantic, so the validator must catch it."""
        edited = make_transaction().model_copy(update={"amount": Decimal("-5")})
        result = validator.validate(edited)
        assert result.has_errors
        assert result.first_error.issue_type == "negative_amount"

    def test_zero_amount_is_warning(self, validator):
        draft, result = validator.validate_fields(_fields(amount=Decimal("0")))
        assert draft is not None
        assert result.is_valid
        assert result.warnings == ["Amount is zero"]

    def test_future_date_is_warning(self, validator):
        draft, result = validator.validate_fields(_fields(date=date(2025, 3, 11)))
        assert draft is not None
        assert result.is_valid
        assert any("future" in w for w in result.warnings)

    def test_today_is_not_future(self, validator):
        _, result = validator.validate_fields(_fields(date=date(2025, 3, 10)))
        assert result.warnings == []


class TestSummary:
    """Tests for the human-readable summary."""

    def test_all_passed(self, validator):
        _, result = validator.validate_fields(_fields())
        assert validator.get_user_friendly_summary(result) == "All checks passed."

    def test_errors_listed(self, validator):
        _, result = validator.validate_fields(_fields(category="Brindes"))
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("Error - category:")
        assert "Use one of:" in summary
