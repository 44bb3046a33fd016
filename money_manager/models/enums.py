"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class EntryKind(str, enum.Enum):
    """
    Direction of an entry.

    Income and expense records share one table and one code
    path; the kind decides which way the entry moves the
    account balance.
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def sign(self) -> int:
        """+1 for money coming in, -1 for money going out."""
        return 1 if self is EntryKind.INCOME else -1

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Division(str, enum.Enum):
    """Secondary partition of entries, independent of category."""
    OFFICE = "Office"
    PERSONAL = "Personal"


class AccountType(str, enum.Enum):
    SAVINGS = "Savings"
    CURRENT = "Current"
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"
    INVESTMENT = "Investment"


class CategoryType(str, enum.Enum):
    INCOME = "Income"
    EXPENSE = "Expense"
    BOTH = "Both"


class CategoryDivision(str, enum.Enum):
    OFFICE = "Office"
    PERSONAL = "Personal"
    BOTH = "Both"
