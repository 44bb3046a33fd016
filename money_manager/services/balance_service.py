"""
Balance service: keeps stored account balances in step with entries.

Entries are the primary record; balances are a side effect.
An adjustment that cannot be applied (unknown account, a
database error) must never fail or undo the entry operation
that triggered it. It is logged and the request carries on.

Adjustments run inside a SAVEPOINT on the caller's session:
- on success they commit together with the entry write
- on failure only the adjustments are rolled back, so the two
  sides of a transfer are applied together or not at all

Each delta is a single UPDATE ... SET balance = balance + :delta
so concurrent requests cannot lose each other's increments.
"""

import logging
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from money_manager.models.account import Account
from money_manager.models.entry import Entry

logger = logging.getLogger(__name__)


class BalanceService:

    def __init__(self, db: Session):
        self.db = db

    def _increment(self, owner: str, account_name: str, delta: Decimal) -> bool:
        """
        Add delta to one account's balance.

        Returns False when no account matches (owner, account_name).
        """
        result = self.db.execute(
            update(Account)
            .where(
                Account.owner == owner,
                Account.account_name == account_name,
            )
            .values(balance=Account.balance + delta)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount > 0

    def apply(self, owner: str, deltas: list[tuple[str, Decimal]]) -> bool:
        """
        Apply a group of (account_name, delta) adjustments.

        Unknown accounts are skipped. Returns False if the group
        failed and was rolled back; the error is logged, never
        raised.
        """
        try:
            with self.db.begin_nested():
                for account_name, delta in deltas:
                    if not self._increment(owner, account_name, delta):
                        logger.warning(
                            "Account '%s' not found for %s, balance not adjusted",
                            account_name, owner,
                        )
                        continue
                    logger.info(
                        "Account '%s' balance adjusted by %s", account_name, delta
                    )
        except SQLAlchemyError:
            logger.exception(
                "Could not adjust account balances for %s: %s", owner, deltas
            )
            return False
        return True

    # --- Entry lifecycle hooks ---

    def entry_deltas(self, entry: Entry) -> list[tuple[str, Decimal]]:
        """
        The balance effect of an entry existing.

        Income adds to its account, expense subtracts. A transfer
        expense also credits the account it was sent to.
        """
        deltas = [(entry.account, entry.amount * entry.kind.sign)]
        if entry.is_transfer and entry.transfer_to:
            deltas.append((entry.transfer_to, entry.amount))
        return deltas

    def on_created(self, entry: Entry) -> bool:
        return self.apply(entry.owner, self.entry_deltas(entry))

    def on_deleted(self, entry: Entry) -> bool:
        """Reverse the effect of an entry that was removed."""
        return self.apply(
            entry.owner,
            [(name, -delta) for name, delta in self.entry_deltas(entry)],
        )

    def on_changed(
        self, entry: Entry, before: list[tuple[str, Decimal]]
    ) -> bool:
        """
        Re-apply an entry's effect after an edit.

        `before` is entry_deltas() captured prior to the edit.
        Nothing is written when the effect did not change.
        """
        after = self.entry_deltas(entry)
        if after == before:
            return True
        reversal = [(name, -delta) for name, delta in before]
        return self.apply(entry.owner, reversal + after)
