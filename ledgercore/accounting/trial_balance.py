"""Point-in-time trial balance over the full transaction history."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from ledgercore.config import get_settings

from .errors import TrialBalanceImbalance
from .ledger import Accounts
from .models import (
    ZERO,
    Account,
    DateWindow,
    Diagnostics,
    Transaction,
    TrialBalance,
    TrialBalanceRow,
)
from .registry import AccountRegistry
from .validator import JournalValidator

LOGGER = logging.getLogger(__name__)


def raw_balances(
    registry: AccountRegistry,
    transactions: Sequence[Transaction],
    window: DateWindow,
    *,
    epsilon: Optional[Decimal] = None,
) -> Tuple[Dict[str, Tuple[Decimal, Decimal]], Diagnostics]:
    """Return ``{code: (total_debits, total_credits)}`` for activity inside ``window``."""
    history = [t for t in transactions if window.contains(t.transaction_date)]
    accepted, diagnostics = JournalValidator(registry, epsilon=epsilon).screen(history)

    totals: Dict[str, Tuple[Decimal, Decimal]] = {}
    for _transaction, entries in accepted:
        for entry in entries:
            debits, credits = totals.get(entry.account_code, (ZERO, ZERO))
            totals[entry.account_code] = (
                debits + entry.debit_amount,
                credits + entry.credit_amount,
            )
    return totals, diagnostics


def build_trial_balance(
    accounts: Accounts,
    transactions: Sequence[Transaction],
    as_of_date: date,
    *,
    epsilon: Optional[Decimal] = None,
) -> TrialBalance:
    """Snapshot every active account's raw debit-minus-credit balance.

    Positive balances land in the debit column and negative ones, as absolute
    values, in the credit column. Columns that disagree are logged, recorded
    as a :class:`TrialBalanceImbalance` diagnostic and can be turned into an
    exception with :meth:`TrialBalance.raise_for_imbalance`.
    """
    epsilon = epsilon if epsilon is not None else get_settings().balance_epsilon
    registry = AccountRegistry.coerce(accounts)
    totals, diagnostics = raw_balances(
        registry, transactions, DateWindow(end=as_of_date), epsilon=epsilon
    )

    rows: List[TrialBalanceRow] = []
    for account in registry:
        if account.code not in totals:
            continue
        debits, credits = totals[account.code]
        if not (debits or credits):
            continue
        rows.append(_row(account, debits - credits))

    total_debit = sum((row.debit for row in rows), ZERO)
    total_credit = sum((row.credit for row in rows), ZERO)
    is_balanced = abs(total_debit - total_credit) < epsilon
    if not is_balanced:
        finding = TrialBalanceImbalance(total_debit=total_debit, total_credit=total_credit)
        LOGGER.error("%s as of %s", finding.message(), as_of_date.isoformat())
        diagnostics = replace(diagnostics, integrity=diagnostics.integrity + (finding,))

    return TrialBalance(
        as_of_date=as_of_date,
        rows=tuple(rows),
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=is_balanced,
        total_accounts=len(registry),
        diagnostics=diagnostics,
    )


def _row(account: Account, balance: Decimal) -> TrialBalanceRow:
    return TrialBalanceRow(
        code=account.code,
        name=account.name,
        type=account.type,
        balance=balance,
        debit=balance if balance > 0 else ZERO,
        credit=-balance if balance < 0 else ZERO,
    )


__all__ = ["build_trial_balance", "raw_balances"]
