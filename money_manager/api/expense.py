"""
Expense API endpoints.

Expenses get the shared entry routes plus transfers, which
are recorded as a tagged expense on the source account.
"""

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from money_manager.api.entries import create_entry_router
from money_manager.errors import MoneyManagerError
from money_manager.models.base import get_db
from money_manager.models.enums import EntryKind
from money_manager.schemas.entry import (
    EntryResponse,
    TransferRequest,
    TransferResponse,
)
from money_manager.services.entry_service import EntryService

router = create_entry_router(EntryKind.EXPENSE, create_path="/minus")


@router.post("/transfer", response_model=TransferResponse, status_code=201)
def transfer(
    request: TransferRequest,
    db: Session = Depends(get_db),
):
    """
    Transfer money between two of the owner's accounts.

    Creates one expense (isTransfer=true) on the source account,
    debits the source, and credits the destination. If the
    balance updates fail the transfer record is still kept.
    """
    service = EntryService(db, EntryKind.EXPENSE)
    try:
        entry = service.transfer(request)
        response = EntryResponse.model_validate(entry)
        db.commit()
    except MoneyManagerError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return TransferResponse(message="Transfer completed successfully!", transfer=response)
