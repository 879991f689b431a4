"""
Transaction Models

A transaction is one recorded income or expense event. It is the only
entity in the system.

DESIGN DECISION: The amount is always stored non-negative; its direction
comes entirely from ``type``. Net effect is computed (``signed_amount``),
never stored.

The category is NOT checked against the chart of accounts here: a record
edited in place can carry any category string, and the aggregation engine
must still cope with it. The TransactionValidator and the spreadsheet
import enforce the chart before records enter the store.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.models.accounts import TransactionType, default_category


# Textual date formats accepted everywhere, in fallback order.
TEXT_DATE_FORMATS: tuple[str, ...] = ("%d-%m-%Y", "%d/%m/%Y")

# Fixed textual form of a transaction date (export, table display).
DATE_LABEL_FORMAT = "%d-%m-%Y"

# Day bucket label used by the charts; the year is dropped.
DAY_LABEL_FORMAT = "%d/%m"


def parse_text_date(
    value: str,
    formats: tuple[str, ...] = TEXT_DATE_FORMATS,
) -> Optional[dt.date]:
    """
    Parse a textual date, trying each format in order.

    Returns None when no format matches or the date does not exist
    on the calendar (e.g. "31-02-2025").
    """
    text = value.strip()
    for fmt in formats:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def coerce_date(
    value: Any,
    formats: tuple[str, ...] = TEXT_DATE_FORMATS,
) -> Optional[dt.date]:
    """
    Truncate a date-like value to day granularity.

    Accepts date, datetime and text in any of ``formats``.
    Anything else yields None.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        return parse_text_date(value, formats)
    return None


class TransactionDraft(BaseModel):
    """
    A transaction that has not been given an identifier yet.

    This is what the entry form and the spreadsheet import produce;
    the store turns it into a Transaction on ``add``.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    merchant_id: int = Field(
        default=1,
        ge=1,
        description="Owning merchant (single fixed value for now)"
    )
    merchant_name: str = Field(
        default="Loja Principal",
        min_length=1,
        max_length=200,
        description="Merchant display name"
    )
    type: TransactionType = Field(
        ...,
        description="Income or Expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Sub-category; should belong to CHART_OF_ACCOUNTS[type]"
    )
    description: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Optional free text"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the entry (no time component)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Non-negative amount in BRL"
    )

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Accept datetimes and the fixed textual formats as well as dates."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            parsed = parse_text_date(v)
            if parsed is None:
                raise ValueError(f"Unrecognised date: {v!r}")
            return parsed
        return v

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def signed_amount(self) -> Decimal:
        """+amount for Income, -amount for Expense."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @property
    def date_label(self) -> str:
        """Date in the fixed dd-mm-YYYY text form."""
        return self.date.strftime(DATE_LABEL_FORMAT)


class Transaction(TransactionDraft):
    """
    A transaction held by the store.

    ``id`` is assigned once by the store and cannot be reassigned.
    """

    id: str = Field(
        ...,
        min_length=1,
        frozen=True,
        description="Opaque unique identifier"
    )

    @classmethod
    def from_draft(cls, draft: TransactionDraft, transaction_id: str) -> "Transaction":
        """Attach an identifier to a draft."""
        return cls(id=transaction_id, **draft.model_dump())

    def with_type(self, transaction_type: Union[TransactionType, str]) -> "Transaction":
        """
        Copy of this transaction with a new type.

        The category is reset to the first valid option of the new type,
        since the old one almost never belongs to it.
        """
        transaction_type = TransactionType(transaction_type)
        if transaction_type == self.type:
            return self.model_copy()
        return self.model_copy(update={
            "type": transaction_type,
            "category": default_category(transaction_type),
        })
