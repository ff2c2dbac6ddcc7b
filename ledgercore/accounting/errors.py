"""Exceptions and diagnostic records raised or reported by the accounting core."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


class LedgerCoreError(Exception):
    """Base class for structurally invalid calls into the core."""


class InvalidDateRange(LedgerCoreError, ValueError):
    """Raised when a reporting window starts after it ends."""


class MissingAccountRegistry(LedgerCoreError, ValueError):
    """Raised when no chart of accounts is supplied."""


class TrialBalanceOutOfBalance(LedgerCoreError):
    """Raised on request when trial balance columns do not agree."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal) -> None:
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            "Trial balance is out of balance: "
            f"debits={total_debit} credits={total_credit} "
            f"variance={total_debit - total_credit}"
        )


# ----------------------------------------------------------------------
# Diagnostics. These are reported alongside results and never raised.
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class UnbalancedTransaction:
    transaction_id: str
    total_debit: Decimal
    total_credit: Decimal

    kind = "unbalanced-transaction"

    @property
    def difference(self) -> Decimal:
        return self.total_debit - self.total_credit

    def message(self) -> str:
        return (
            f"Transaction '{self.transaction_id}' does not balance: "
            f"debits={self.total_debit} credits={self.total_credit}"
        )


@dataclass(frozen=True)
class UnmappedAccountCode:
    transaction_id: str
    account_code: Optional[str]
    entry_index: int

    kind = "unmapped-entry"

    def message(self) -> str:
        return (
            f"Entry {self.entry_index} of transaction '{self.transaction_id}' "
            f"references unknown account '{self.account_code}'"
        )


@dataclass(frozen=True)
class TrialBalanceImbalance:
    total_debit: Decimal
    total_credit: Decimal

    kind = "trial-balance-imbalance"

    @property
    def variance(self) -> Decimal:
        return self.total_debit - self.total_credit

    def message(self) -> str:
        return (
            "Trial balance columns disagree: "
            f"debits={self.total_debit} credits={self.total_credit}"
        )


__all__ = [
    "LedgerCoreError",
    "InvalidDateRange",
    "MissingAccountRegistry",
    "TrialBalanceOutOfBalance",
    "UnbalancedTransaction",
    "UnmappedAccountCode",
    "TrialBalanceImbalance",
]
