"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from money_manager.models.base import Base
from money_manager.models.enums import (
    EntryKind,
    Division,
    AccountType,
    CategoryType,
    CategoryDivision,
)
from money_manager.models.entry import Entry
from money_manager.models.account import Account
from money_manager.models.category import Category

__all__ = [
    "Base",
    "EntryKind",
    "Division",
    "AccountType",
    "CategoryType",
    "CategoryDivision",
    "Entry",
    "Account",
    "Category",
]
