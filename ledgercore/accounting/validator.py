"""Balance checks applied to transactions before they are aggregated."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ledgercore.config import get_settings

from .errors import UnbalancedTransaction, UnmappedAccountCode
from .models import ZERO, Diagnostics, JournalEntry, Transaction
from .registry import AccountRegistry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    transaction_id: str
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool

    @property
    def difference(self) -> Decimal:
        return self.total_debit - self.total_credit


class JournalValidator:
    """Screens transactions for the accounting identity and mapped accounts.

    Unbalanced transactions are excluded wholesale. Entries pointing at an
    unknown account are dropped while the remaining entries of the same
    transaction are kept. Both cases are reported, never raised.
    """

    def __init__(self, registry: AccountRegistry, epsilon: Optional[Decimal] = None) -> None:
        self._registry = registry
        self._epsilon = epsilon if epsilon is not None else get_settings().balance_epsilon

    @property
    def epsilon(self) -> Decimal:
        return self._epsilon

    def validate(self, transaction: Transaction) -> ValidationResult:
        debit_total = sum((entry.debit_amount for entry in transaction.entries), ZERO)
        credit_total = sum((entry.credit_amount for entry in transaction.entries), ZERO)
        return ValidationResult(
            transaction_id=transaction.id,
            total_debit=debit_total,
            total_credit=credit_total,
            is_balanced=abs(debit_total - credit_total) < self._epsilon,
        )

    def mapped_entries(
        self, transaction: Transaction
    ) -> Tuple[List[JournalEntry], List[UnmappedAccountCode]]:
        mapped: List[JournalEntry] = []
        unmapped: List[UnmappedAccountCode] = []
        for index, entry in enumerate(transaction.entries):
            if entry.account_code in self._registry:
                mapped.append(entry)
            else:
                unmapped.append(
                    UnmappedAccountCode(
                        transaction_id=transaction.id,
                        account_code=entry.account_code,
                        entry_index=index,
                    )
                )
        return mapped, unmapped

    def screen(
        self, transactions: Iterable[Transaction]
    ) -> Tuple[List[Tuple[Transaction, List[JournalEntry]]], Diagnostics]:
        """Return accepted transactions with their mapped entries, plus diagnostics."""
        accepted: List[Tuple[Transaction, List[JournalEntry]]] = []
        unbalanced: List[UnbalancedTransaction] = []
        unmapped: List[UnmappedAccountCode] = []
        skipped_unposted = 0
        for transaction in transactions:
            if not transaction.is_posted:
                skipped_unposted += 1
                LOGGER.debug(
                    "Skipping transaction %s with status %s", transaction.id, transaction.status
                )
                continue
            result = self.validate(transaction)
            if not result.is_balanced:
                finding = UnbalancedTransaction(
                    transaction_id=transaction.id,
                    total_debit=result.total_debit,
                    total_credit=result.total_credit,
                )
                LOGGER.warning(finding.message())
                unbalanced.append(finding)
                continue
            entries, missing = self.mapped_entries(transaction)
            for finding in missing:
                LOGGER.warning(finding.message())
            unmapped.extend(missing)
            accepted.append((transaction, entries))
        diagnostics = Diagnostics(
            unbalanced=tuple(unbalanced),
            unmapped=tuple(unmapped),
            skipped_unposted=skipped_unposted,
        )
        return accepted, diagnostics


__all__ = ["JournalValidator", "ValidationResult"]
