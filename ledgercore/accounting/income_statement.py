"""Profit and loss over a reporting window."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Optional, Sequence

from .ledger import Accounts
from .models import ZERO, DateWindow, IncomeStatement, Transaction
from .registry import AccountRegistry
from .trial_balance import raw_balances

LOGGER = logging.getLogger(__name__)


def build_income_statement(
    accounts: Accounts,
    transactions: Sequence[Transaction],
    window: Optional[DateWindow] = None,
    *,
    epsilon: Optional[Decimal] = None,
) -> IncomeStatement:
    """Revenue less expenses for activity inside ``window``.

    Revenue accounts report credits less debits and expense accounts debits
    less credits, keyed by account code. Accounts without activity are left out.
    """
    registry = AccountRegistry.coerce(accounts)
    window = window or DateWindow()
    totals, diagnostics = raw_balances(registry, transactions, window, epsilon=epsilon)

    revenue: Dict[str, Decimal] = {}
    expenses: Dict[str, Decimal] = {}
    for account in registry:
        if account.code not in totals:
            continue
        debits, credits = totals[account.code]
        if account.type == "revenue":
            revenue[account.code] = credits - debits
        elif account.type == "expense":
            expenses[account.code] = debits - credits

    statement = IncomeStatement(
        window=window,
        revenue=revenue,
        expenses=expenses,
        total_revenue=sum(revenue.values(), ZERO),
        total_expenses=sum(expenses.values(), ZERO),
        diagnostics=diagnostics,
    )
    LOGGER.debug("Income statement net income %s", statement.net_income)
    return statement


__all__ = ["build_income_statement"]
