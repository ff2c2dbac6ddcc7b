"""Balance sheet grouped by account type."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Sequence

from ledgercore.config import get_settings

from .ledger import Accounts
from .models import ZERO, BalanceSheet, DateWindow, Transaction
from .registry import AccountRegistry
from .trial_balance import raw_balances


def build_balance_sheet(
    accounts: Accounts,
    transactions: Sequence[Transaction],
    as_of_date: date,
    *,
    epsilon: Optional[Decimal] = None,
) -> BalanceSheet:
    """Group balances as of ``as_of_date`` into assets, liabilities and equity.

    Revenue and expense accounts are not closed into equity by upstream
    collaborators, so their net is reported as ``current_earnings``.
    """
    epsilon = epsilon if epsilon is not None else get_settings().balance_epsilon
    registry = AccountRegistry.coerce(accounts)
    totals, diagnostics = raw_balances(
        registry, transactions, DateWindow(end=as_of_date), epsilon=epsilon
    )

    sections: Dict[str, Dict[str, Decimal]] = {
        "asset": {},
        "liability": {},
        "equity": {},
    }
    revenue = ZERO
    expenses = ZERO
    for account in registry:
        debits, credits = totals.get(account.code, (ZERO, ZERO))
        if account.type == "revenue":
            revenue += credits - debits
        elif account.type == "expense":
            expenses += debits - credits
        elif debits or credits:
            # presented on the side the account type belongs to
            natural = debits - credits if account.type == "asset" else credits - debits
            sections[account.type][account.code] = natural

    total_assets = sum(sections["asset"].values(), ZERO)
    total_liabilities = sum(sections["liability"].values(), ZERO)
    total_equity = sum(sections["equity"].values(), ZERO)
    current_earnings = revenue - expenses
    variance = total_assets - (total_liabilities + total_equity + current_earnings)
    return BalanceSheet(
        as_of_date=as_of_date,
        assets=sections["asset"],
        liabilities=sections["liability"],
        equity=sections["equity"],
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        current_earnings=current_earnings,
        is_balanced=abs(variance) < epsilon,
        diagnostics=diagnostics,
    )


__all__ = ["build_balance_sheet"]
