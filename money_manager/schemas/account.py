"""
Pydantic schemas for accounts and categories.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from money_manager.models.enums import AccountType, CategoryType, CategoryDivision
from money_manager.schemas.base import CamelModel


# --- Account Schemas ---

class AccountCreate(CamelModel):
    """Request to register a new account for an owner."""
    owner: str = Field(min_length=3, max_length=255)
    account_name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    currency: str = Field(default="USD", min_length=3, max_length=3)


class AccountResponse(CamelModel):
    id: int
    owner: str
    account_name: str
    account_type: AccountType
    balance: Decimal
    currency: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


# --- Category Schemas ---

class CategoryCreate(CamelModel):
    owner: str = Field(min_length=3, max_length=255)
    name: str = Field(min_length=1, max_length=100)
    type: CategoryType
    division: CategoryDivision = CategoryDivision.PERSONAL


class CategoryResponse(CamelModel):
    id: int
    owner: str
    name: str
    type: CategoryType
    division: CategoryDivision
    is_active: bool
    created_at: datetime
