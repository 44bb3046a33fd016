"""
Entry model.

An entry is a single income or expense record. Both kinds
share the same shape; the kind column says whether the
amount is credited to or debited from the named account.
The amount itself is never negative.

Entries can only be edited or deleted for a short window
after they are created.
"""

import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal

from sqlalchemy import (
    String, Boolean, Date, DateTime, Numeric, Text,
    CheckConstraint, Index,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from money_manager.models.base import Base
from money_manager.models.enums import EntryKind, Division


EDIT_WINDOW = timedelta(hours=12)

DEFAULT_ACCOUNT = "Cash"


def within_edit_window(created_at: datetime, now: datetime | None = None) -> bool:
    """Return True while an entry created at created_at may still change."""
    if created_at is None:
        return False
    now = now or datetime.utcnow()
    return created_at > now - EDIT_WINDOW


class Entry(Base):
    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_entries_amount_non_negative"),
        Index("ix_entries_owner_date", "owner", "date"),
        Index("ix_entries_owner_division", "owner", "division"),
        Index("ix_entries_owner_category", "owner", "category"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    kind: Mapped[EntryKind] = mapped_column(
        SAEnum(EntryKind, name="entry_kind_enum", create_constraint=True),
        nullable=False,
    )
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(100), nullable=False)
    # "date" is the user-entered transaction date, not the creation time
    entry_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    time: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    division: Mapped[Division] = mapped_column(
        SAEnum(Division, name="division_enum", create_constraint=True),
        nullable=False,
        default=Division.PERSONAL,
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Soft reference to Account.account_name, never a foreign key
    account: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_ACCOUNT
    )
    is_transfer: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    transfer_to: Mapped[str | None] = mapped_column(String(100), nullable=True)
    transfer_from: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def can_edit(self, now: datetime | None = None) -> bool:
        """Check whether the entry is still inside its edit window."""
        return within_edit_window(self.created_at, now)

    @property
    def signed_amount(self) -> Decimal:
        return self.amount * self.kind.sign

    def __repr__(self) -> str:
        return (
            f"<Entry {self.kind.value} {self.amount} "
            f"{self.account} ({self.entry_date})>"
        )
