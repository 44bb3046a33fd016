"""
Account service: accounts and categories an owner registers.

Neither is required for recording entries: an entry naming an
account that does not exist is still accepted, its balance
adjustment is just skipped.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from money_manager.errors import ConflictError, NotFoundError
from money_manager.models.account import Account
from money_manager.models.category import Category
from money_manager.models.enums import CategoryDivision, CategoryType
from money_manager.schemas.account import AccountCreate, CategoryCreate


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> Account:
        """
        Register an account with an opening balance.

        Raises ConflictError if the owner already has an account
        with that name.
        """
        existing = self.db.execute(
            select(Account).where(
                Account.owner == request.owner,
                Account.account_name == request.account_name,
            )
        ).scalar_one_or_none()

        if existing:
            raise ConflictError(
                f"Account '{request.account_name}' already exists"
            )

        account = Account(
            owner=request.owner,
            account_name=request.account_name,
            account_type=request.account_type,
            balance=request.balance,
            currency=request.currency,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_account(self, owner: str, account_name: str) -> Account:
        account = self.db.execute(
            select(Account).where(
                Account.owner == owner,
                Account.account_name == account_name,
            )
        ).scalar_one_or_none()
        if not account:
            raise NotFoundError(f"Account '{account_name}' not found")
        return account

    def get_owner_accounts(self, owner: str) -> list[Account]:
        """All accounts for an owner, alphabetically."""
        accounts = self.db.execute(
            select(Account)
            .where(Account.owner == owner)
            .order_by(Account.account_name)
        ).scalars().all()
        return list(accounts)

    def create_category(self, request: CategoryCreate) -> Category:
        """Raises ConflictError on a duplicate (owner, name, division)."""
        existing = self.db.execute(
            select(Category).where(
                Category.owner == request.owner,
                Category.name == request.name,
                Category.division == request.division,
            )
        ).scalar_one_or_none()

        if existing:
            raise ConflictError(
                f"Category '{request.name}' already exists "
                f"for division {request.division.value}"
            )

        category = Category(
            owner=request.owner,
            name=request.name,
            type=request.type,
            division=request.division,
        )
        self.db.add(category)
        self.db.flush()
        return category

    def get_owner_categories(
        self,
        owner: str,
        category_type: CategoryType | None = None,
        division: CategoryDivision | None = None,
    ) -> list[Category]:
        """
        Active categories for an owner.

        Filtering by type also returns "Both" categories, and the
        same goes for division.
        """
        stmt = select(Category).where(
            Category.owner == owner, Category.is_active.is_(True)
        )
        if category_type is not None:
            stmt = stmt.where(
                Category.type.in_([category_type, CategoryType.BOTH])
            )
        if division is not None:
            stmt = stmt.where(
                Category.division.in_([division, CategoryDivision.BOTH])
            )
        return list(self.db.execute(stmt.order_by(Category.name)).scalars().all())
