"""
Two-Stage Transaction Validation

STAGE 1 - SCHEMA VALIDATION:
- Type checking and required fields, done by the pydantic model
- Catches malformed spreadsheet rows and broken form input

STAGE 2 - SEMANTIC VALIDATION:
- Category must belong to the chart of accounts for the type
- Amount must not be negative (edits made with model_copy skip pydantic)
- Zero amounts and future dates are flagged, not rejected

IMPORTANT: Validation NEVER silently fixes issues.
It reports them; the caller decides whether to skip the record (import)
or keep the form open (manual edit).
"""

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ledger.models.accounts import categories_for, is_valid_category
from ledger.models.transaction import Transaction, TransactionDraft
from ledger.models.validation import ValidationIssue, ValidationResult


class TransactionValidator:
    """
    Validates transaction data before it enters the store.

    Stage 1: Schema validation (building the pydantic draft)
    Stage 2: Semantic validation (chart of accounts, amount, date)
    """

    def __init__(self, today: Optional[date] = None):
        """
        Initialize validator.

        Args:
            today: Reference date for the future-date check. Defaults to
                   the current date at validation time.
        """
        self._today = today

    def _validate_schema(
        self,
        data: Mapping[str, Any],
    ) -> tuple[Optional[TransactionDraft], list[ValidationIssue]]:
        """
        Stage 1: Build a draft from raw field values.

        Returns: (draft_or_None, list_of_issues)
        """
        try:
            return TransactionDraft(**data), []
        except ValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]) or "transaction",
                    issue_type=error["type"],
                    message=error["msg"],
                    severity="error",
                )
                for error in e.errors()
            ]
            return None, issues

    def _validate_semantic(
        self,
        draft: TransactionDraft,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Business rules.

        Returns: list_of_issues
        """
        issues = []
        today = self._today or date.today()

        if not is_valid_category(draft.type, draft.category):
            allowed = ", ".join(categories_for(draft.type))
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_category",
                message=(
                    f"Category '{draft.category}' is not valid for "
                    f"{draft.type.value} transactions"
                ),
                severity="error",
                suggested_fix=f"Use one of: {allowed}",
            ))

        amount = draft.amount
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        if amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="negative_amount",
                message="Amount cannot be negative; the type gives the direction",
                severity="error",
                suggested_fix="Enter the absolute value and pick Income or Expense",
            ))
        elif amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="zero_amount",
                message="Amount is zero",
                severity="warning",
            ))

        if isinstance(draft.date, date) and draft.date > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({draft.date_label}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        return issues

    def validate(
        self,
        transaction: Union[TransactionDraft, Transaction],
    ) -> ValidationResult:
        """Run the semantic stage on an already-built draft or transaction."""
        issues = self._validate_semantic(transaction)
        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def validate_fields(
        self,
        data: Mapping[str, Any],
    ) -> tuple[Optional[TransactionDraft], ValidationResult]:
        """
        Run the full two-stage pipeline on raw field values.

        Returns:
            (draft, result). ``draft`` is None whenever result has errors.
        """
        draft, issues = self._validate_schema(data)

        # Only run stage 2 if stage 1 passes
        if draft is not None:
            issues.extend(self._validate_semantic(draft))

        is_valid = draft is not None and not any(
            issue.severity == "error" for issue in issues
        )
        return (draft if is_valid else None), ValidationResult(
            is_valid=is_valid,
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One message per issue, errors first."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"Error - {issue.field}: {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"  {issue.suggested_fix}")
        for warning in result.warnings:
            lines.append(f"Warning - {warning}")
        return "\n".join(lines)
