"""General ledger aggregation with per-account running balances."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .models import (
    ZERO,
    Account,
    AccountSummary,
    DateWindow,
    LedgerLine,
    LedgerReport,
    Transaction,
)
from .registry import AccountRegistry
from .validator import JournalValidator

LOGGER = logging.getLogger(__name__)

Accounts = Union[AccountRegistry, Iterable[Account], None]


@dataclass
class _AccountActivity:
    account: Account
    total_debits: Decimal = ZERO
    total_credits: Decimal = ZERO
    balance: Decimal = ZERO
    lines: List[LedgerLine] = field(default_factory=list)

    def post(self, debit: Decimal, credit: Decimal) -> Decimal:
        self.total_debits += debit
        self.total_credits += credit
        if self.account.normal_balance == "debit":
            self.balance += debit - credit
        else:
            self.balance += credit - debit
        return self.balance

    @property
    def has_activity(self) -> bool:
        return bool(self.total_debits or self.total_credits or self.balance)


def chronological(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Sort by date, then creation time; remaining ties keep input order."""
    return sorted(transactions, key=_ordering_key)


def _ordering_key(transaction: Transaction) -> Tuple[date, bool, datetime]:
    created_at = transaction.created_at
    if created_at is None:
        return transaction.transaction_date, False, datetime.min
    # naive timestamps are taken as UTC
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
    return transaction.transaction_date, True, created_at


def build_ledger(
    accounts: Accounts,
    transactions: Sequence[Transaction],
    window: Optional[DateWindow] = None,
    *,
    epsilon: Optional[Decimal] = None,
) -> LedgerReport:
    """Fold transactions into account summaries and running-balance ledgers.

    Only activity inside ``window`` is aggregated; every account starts the
    window at zero. Unbalanced transactions and entries for unknown accounts
    are left out and returned in ``LedgerReport.diagnostics``.
    """
    registry = AccountRegistry.coerce(accounts)
    window = window or DateWindow()
    in_window = [t for t in transactions if window.contains(t.transaction_date)]

    validator = JournalValidator(registry, epsilon=epsilon)
    accepted, diagnostics = validator.screen(chronological(in_window))

    activity: Dict[str, _AccountActivity] = {
        account.code: _AccountActivity(account) for account in registry
    }
    for transaction, entries in accepted:
        for entry in entries:
            bucket = activity[entry.account_code]
            balance = bucket.post(entry.debit_amount, entry.credit_amount)
            bucket.lines.append(
                LedgerLine(
                    date=transaction.transaction_date,
                    description=entry.description or transaction.description,
                    reference=transaction.reference_number,
                    debit=entry.debit_amount,
                    credit=entry.credit_amount,
                    running_balance=balance,
                    transaction_id=transaction.id,
                )
            )

    summaries: List[AccountSummary] = []
    ledger_lines: Dict[str, Tuple[LedgerLine, ...]] = {}
    for code, bucket in activity.items():
        if not bucket.has_activity:
            continue
        account = bucket.account
        summaries.append(
            AccountSummary(
                code=code,
                name=account.name,
                type=account.type,
                normal_balance=account.normal_balance,
                total_debits=bucket.total_debits,
                total_credits=bucket.total_credits,
                closing_balance=bucket.balance,
            )
        )
        ledger_lines[code] = tuple(bucket.lines)

    LOGGER.debug(
        "Built ledger over %d of %d transactions for %d accounts",
        len(accepted),
        len(transactions),
        len(summaries),
    )
    return LedgerReport(
        summaries=tuple(summaries),
        ledger_lines=ledger_lines,
        diagnostics=diagnostics,
        window=window,
    )


__all__ = ["build_ledger", "chronological"]
