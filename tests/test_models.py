"""
Tests for Merchant Ledger models

Test strategy:
1. Unit tests for the pydantic models and the chart of accounts
2. Store, validator, aggregation and spreadsheet tests live in their own modules
3. Everything is in memory; no files or network
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pydantic import ValidationError

from ledger.models import (
    CHART_OF_ACCOUNTS,
    ExpenseCategory,
    ImportResult,
    IncomeCategory,
    SkippedRow,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    categories_for,
    chart_of_accounts_rows,
    coerce_date,
    default_category,
    is_valid_category,
    parse_text_date,
)
from ledger.models.reports import CategoryColor, DateWindow, DayBucket


class TestChartOfAccounts:
    """Tests for the fixed category taxonomy."""

    def test_two_types_exist(self):
        """Only Income and Expense are known."""
        assert {t.value for t in TransactionType} == {"Income", "Expense"}

    def test_first_category_is_default(self):
        """The first listed category is the default of each type."""
        assert default_category(TransactionType.INCOME) == "Vendas de Produtos"
        assert default_category(TransactionType.EXPENSE) == "Custos Diretos"

    def test_categories_follow_enum_order(self):
        """Category order comes from the enum declaration."""
        assert categories_for(TransactionType.INCOME) == [c.value for c in IncomeCategory]
        assert categories_for(TransactionType.EXPENSE) == [c.value for c in ExpenseCategory]

    def test_categories_for_accepts_raw_value(self):
        """Type may be passed as its string value."""
        assert categories_for("Expense") == categories_for(TransactionType.EXPENSE)

    def test_categories_for_rejects_unknown_type(self):
        """An unknown type is a programming error."""
        with pytest.raises(ValueError):
            categories_for("Receita")

    def test_category_membership(self):
        """Categories are only valid under their own type."""
        assert is_valid_category(TransactionType.INCOME, "Vendas de Produtos")
        assert not is_valid_category(TransactionType.EXPENSE, "Vendas de Produtos")
        assert not is_valid_category(TransactionType.INCOME, "Brindes")

    def test_categories_are_disjoint(self):
        """No category belongs to both types."""
        income = set(CHART_OF_ACCOUNTS[TransactionType.INCOME])
        expense = set(CHART_OF_ACCOUNTS[TransactionType.EXPENSE])
        assert not income & expense

    def test_reference_rows_cover_every_category(self):
        """Every category has a described reference row."""
        rows = list(chart_of_accounts_rows())
        assert len(rows) == len(IncomeCategory) + len(ExpenseCategory)
        assert rows[0] == ("Income", "Vendas de Produtos", "Valor recebido das plataformas")
        assert all(description for _, _, description in rows)


class TestDateParsing:
    """Tests for textual date handling."""

    def test_dash_format(self):
        assert parse_text_date("07-03-2025") == date(2025, 3, 7)

    def test_slash_format_fallback(self):
        """dd/mm/YYYY is tried after dd-mm-YYYY."""
        assert parse_text_date("07/03/2025") == date(2025, 3, 7)

    def test_impossible_date(self):
        """A date missing from the calendar is not silently normalised."""
        assert parse_text_date("31-02-2025") is None

    def test_garbage(self):
        assert parse_text_date("yesterday") is None

    def test_coerce_datetime_truncates(self):
        assert coerce_date(datetime(2025, 3, 7, 23, 59)) == date(2025, 3, 7)

    def test_coerce_unknown_type(self):
        assert coerce_date(45723) is None
        assert coerce_date(None) is None


class TestTransactionModels:
    """Tests for TransactionDraft and Transaction."""

    def test_draft_creation(self):
        """Merchant fields default to the single fixed merchant."""
        draft = TransactionDraft(
            type=TransactionType.INCOME,
            category="Vendas de Produtos",
            date=date(2025, 3, 7),
            amount=Decimal("5000"),
        )
        assert draft.merchant_id == 1
        assert draft.merchant_name == "Loja Principal"
        assert draft.description is None

    def test_draft_strips_whitespace(self):
        """Whitespace around text fields is stripped."""
        draft = TransactionDraft(
            type="Expense",
            category="  Custos Diretos  ",
            description="  Compra  ",
            date="07-03-2025",
            amount="500",
        )
        assert draft.category == "Custos Diretos"
        assert draft.description == "Compra"

    def test_blank_description_is_none(self):
        draft = TransactionDraft(
            type="Expense",
            category="Custos Diretos",
            description="   ",
            date=date(2025, 3, 7),
            amount="1",
        )
        assert draft.description is None

    def test_draft_parses_text_dates(self):
        draft = TransactionDraft(
            type="Income",
            category="Vendas de Produtos",
            date="07/03/2025",
            amount="1",
        )
        assert draft.date == date(2025, 3, 7)

    def test_draft_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            TransactionDraft(
                type="Income",
                category="Vendas de Produtos",
                date="31-02-2025",
                amount="1",
            )

    def test_draft_rejects_negative_amount(self):
        """Direction comes from the type, never from the sign."""
        with pytest.raises(ValueError):
            TransactionDraft(
                type="Expense",
                category="Custos Diretos",
                date=date(2025, 3, 7),
                amount=Decimal("-100"),
            )

    def test_draft_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            TransactionDraft(
                type="Despesa",
                category="Custos Diretos",
                date=date(2025, 3, 7),
                amount="1",
            )

    def test_signed_amount(self, make_transaction):
        assert make_transaction("Income", amount="50").signed_amount == Decimal("50")
        assert make_transaction("Expense", amount="50").signed_amount == Decimal("-50")

    def test_date_label(self, make_transaction):
        assert make_transaction(on=date(2025, 3, 7)).date_label == "07-03-2025"

    def test_from_draft_keeps_fields(self):
        draft = TransactionDraft(
            type="Expense",
            category="Custos Diretos",
            date=date(2025, 3, 7),
            amount="500",
        )
        transaction = Transaction.from_draft(draft, "abc")
        assert transaction.id == "abc"
        assert transaction.amount == Decimal("500")
        assert transaction.category == "Custos Diretos"

    def test_id_is_frozen(self, make_transaction):
        """The identifier cannot be reassigned."""
        transaction = make_transaction(transaction_id="x")
        with pytest.raises(ValidationError):
            transaction.id = "y"

    def test_with_type_resets_category(self, make_transaction):
        transaction = make_transaction("Expense", category="Taxas de Pagamento")
        switched = transaction.with_type(TransactionType.INCOME)

        assert switched.type == TransactionType.INCOME
        assert switched.category == "Vendas de Produtos"
        assert switched.id == transaction.id
        assert transaction.type == TransactionType.EXPENSE

    def test_with_same_type_keeps_category(self, make_transaction):
        transaction = make_transaction("Expense", category="Taxas de Pagamento")
        assert transaction.with_type("Expense").category == "Taxas de Pagamento"


class TestReportModels:
    """Tests for the reporting value objects."""

    def test_window_values(self):
        assert [w.value for w in DateWindow] == ["1W", "1M", "1Y", "ALL"]
        assert DateWindow.ALL_TIME.label == "All time"

    def test_day_bucket_sort_key(self):
        """month * 31 + day."""
        assert DayBucket(label="07/03", value=Decimal("1")).sort_key == 3 * 31 + 7

    def test_day_bucket_label_pattern(self):
        with pytest.raises(ValidationError):
            DayBucket(label="2025-03-07", value=Decimal("1"))

    def test_category_color_pattern(self):
        with pytest.raises(ValidationError):
            CategoryColor(name="x", color="red")


class TestImportResult:
    """Tests for import diagnostics."""

    def test_counts(self):
        result = ImportResult(
            skipped=[SkippedRow(row_number=3, field="date", reason="Invalid date format")]
        )
        assert result.accepted_count == 0
        assert result.skipped_count == 1
        assert result.has_skips

    def test_row_number_is_one_based(self):
        with pytest.raises(ValidationError):
            SkippedRow(row_number=0, reason="x")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="category",
                    issue_type="invalid_category",
                    message="Bad category",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1
        assert result.first_error.field == "category"

    def test_validation_result_warnings_only(self):
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="zero_amount",
                    message="Amount is zero",
                    severity="warning",
                ),
            ],
        )
        assert not result.has_errors
        assert result.warnings == ["Amount is zero"]
        assert result.first_error is None

    def test_severity_is_restricted(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="x", message="x", severity="fatal")
