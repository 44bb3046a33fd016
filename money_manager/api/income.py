"""
Income API endpoints.
"""

from money_manager.api.entries import create_entry_router
from money_manager.models.enums import EntryKind

router = create_entry_router(EntryKind.INCOME, create_path="/add")
