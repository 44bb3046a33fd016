"""
Pydantic schemas for income and expense entries.

These define the API contract. Income and expense requests
have exactly the same shape; the router they arrive on
decides the kind.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import Field, field_validator, model_validator

from money_manager.models.enums import Division, EntryKind
from money_manager.schemas.base import CamelModel


# --- Request Schemas ---

class EntryCreate(CamelModel):
    """Request to record a new income or expense."""
    owner: str = Field(min_length=3, max_length=255)
    source: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, decimal_places=4)
    payment_method: str = Field(min_length=1, max_length=100)
    entry_date: date = Field(alias="date")
    time: str = Field(min_length=1, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)
    division: Division = Division.PERSONAL
    category: str | None = Field(default=None, max_length=100)
    account: str | None = Field(default=None, max_length=100)


# Fields that are NOT NULL on the model. A client may leave them
# out of an update, but may not explicitly null them.
REQUIRED_UPDATE_FIELDS = (
    "source", "amount", "payment_method", "entry_date",
    "time", "division", "account",
)


class EntryUpdate(CamelModel):
    """
    Partial update of an entry.

    Only fields present in the request body are changed.
    Owner, kind, and the creation timestamp are immutable.
    """
    source: str | None = Field(default=None, min_length=1, max_length=255)
    amount: Decimal | None = Field(default=None, ge=0, decimal_places=4)
    payment_method: str | None = Field(default=None, min_length=1, max_length=100)
    entry_date: date | None = Field(default=None, alias="date")
    time: str | None = Field(default=None, min_length=1, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)
    division: Division | None = None
    category: str | None = Field(default=None, max_length=100)
    account: str | None = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "EntryUpdate":
        nulled = [
            name for name in REQUIRED_UPDATE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self


class TransferRequest(CamelModel):
    """Move money from one of the owner's accounts to another."""
    owner: str = Field(min_length=3, max_length=255)
    from_account: str = Field(min_length=1, max_length=100)
    to_account: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(gt=0, decimal_places=4)
    entry_date: date = Field(alias="date")
    time: str | None = Field(default=None, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("to_account")
    @classmethod
    def accounts_must_differ(cls, v: str, info) -> str:
        if v == info.data.get("from_account"):
            raise ValueError("Cannot transfer to the same account")
        return v


# --- Response Schemas ---

class EntryResponse(CamelModel):
    """Single entry in API responses."""
    id: int
    external_id: uuid.UUID
    owner: str
    kind: EntryKind
    source: str
    amount: Decimal
    payment_method: str
    entry_date: date = Field(alias="date")
    time: str
    notes: str | None
    division: Division
    category: str | None
    account: str
    is_transfer: bool
    transfer_to: str | None
    transfer_from: str | None
    created_at: datetime
    updated_at: datetime


class EntryMessage(CamelModel):
    """Response after creating, updating, or deleting an entry."""
    message: str
    entry: EntryResponse | None = None


class TransferResponse(CamelModel):
    message: str
    transfer: EntryResponse


class EntryTotal(CamelModel):
    kind: EntryKind
    total: Decimal


class EntryCategorySummary(CamelModel):
    """One row of the per-kind category breakdown."""
    category: str | None
    division: Division | None
    total_amount: Decimal
    count: int


class EntrySummaryResponse(CamelModel):
    summary: list[EntryCategorySummary]
