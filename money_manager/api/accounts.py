"""
Account and category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from money_manager.errors import MoneyManagerError
from money_manager.models.base import get_db
from money_manager.models.enums import CategoryDivision, CategoryType
from money_manager.services.account_service import AccountService
from money_manager.schemas.account import (
    AccountCreate,
    AccountResponse,
    CategoryCreate,
    CategoryResponse,
)

router = APIRouter(tags=["Accounts"])


# --- Account Endpoints ---

@router.post("/api/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Register an account; its name must be unique for the owner."""
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except MoneyManagerError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/api/accounts/{owner}", response_model=list[AccountResponse])
def list_accounts(
    owner: str,
    db: Session = Depends(get_db),
):
    """All accounts for an owner with their current balances."""
    return AccountService(db).get_owner_accounts(owner)


@router.get(
    "/api/accounts/{owner}/{account_name}",
    response_model=AccountResponse,
)
def get_account(
    owner: str,
    account_name: str,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.get_account(owner, account_name)
    except MoneyManagerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


# --- Category Endpoints ---

@router.post("/api/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreate,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        category = service.create_category(request)
        db.commit()
        return category
    except MoneyManagerError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/api/categories/{owner}", response_model=list[CategoryResponse])
def list_categories(
    owner: str,
    type: CategoryType | None = Query(None),
    division: CategoryDivision | None = Query(None),
    db: Session = Depends(get_db),
):
    """Active categories, optionally narrowed by type and division."""
    return AccountService(db).get_owner_categories(owner, type, division)
