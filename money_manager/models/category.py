"""
Category model.

A lightweight per-owner taxonomy. Entries store their
category as free text, so this table is a catalogue for
clients to pick from rather than a constraint.
"""

from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from money_manager.models.base import Base
from money_manager.models.enums import CategoryType, CategoryDivision


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint(
            "owner", "name", "division", name="uq_categories_owner_name_division"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[CategoryType] = mapped_column(
        SAEnum(CategoryType, name="category_type_enum", create_constraint=True),
        nullable=False,
    )
    division: Mapped[CategoryDivision] = mapped_column(
        SAEnum(
            CategoryDivision,
            name="category_division_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=CategoryDivision.PERSONAL,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Category {self.name} ({self.type.value}/{self.division.value})>"
