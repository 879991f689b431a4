"""
Import Result Models

A spreadsheet import is best effort: every row either becomes an
accepted draft or a SkippedRow diagnostic. One bad row never aborts
the batch.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ledger.models.transaction import TransactionDraft


class SkippedRow(BaseModel):
    """Diagnostic for a spreadsheet row that was not imported."""

    row_number: int = Field(
        ...,
        ge=1,
        description="1-based row number in the sheet (the header is row 1)"
    )
    field: Optional[str] = Field(
        default=None,
        description="Column that caused the skip, if a single one did"
    )
    reason: str = Field(
        ...,
        description="Human-readable reason"
    )
    raw_value: Optional[Any] = Field(
        default=None,
        description="Offending cell value, as read"
    )


class ImportResult(BaseModel):
    """Outcome of one spreadsheet import."""

    accepted: list[TransactionDraft] = Field(default_factory=list)
    skipped: list[SkippedRow] = Field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def has_skips(self) -> bool:
        return bool(self.skipped)
