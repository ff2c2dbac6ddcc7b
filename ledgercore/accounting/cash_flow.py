"""Monthly cash trend derived from transaction types.

This is a cash-basis approximation that reads each transaction's
``total_amount``. It never looks at journal entries; the accrual-basis
figures come from :mod:`ledgercore.accounting.ledger`.
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from ledgercore.config import get_settings

from .models import ZERO, CashFlowPoint, Transaction

LOGGER = logging.getLogger(__name__)

INFLOW_TYPES = frozenset({"receipt", "sale"})
OUTFLOW_TYPES = frozenset({"payment", "expense"})
MONTH_LABEL_FORMAT = "%b %y"


def cash_effect(transaction: Transaction) -> Decimal:
    """Signed cash movement of a transaction, zero for non-cash types."""
    if transaction.transaction_type in INFLOW_TYPES:
        return transaction.total_amount
    if transaction.transaction_type in OUTFLOW_TYPES:
        return -transaction.total_amount
    return ZERO


def _add_months(month_start: date, months: int) -> date:
    index = month_start.year * 12 + (month_start.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_starts(today: date, months: int) -> List[date]:
    """First day of each of the ``months`` calendar months ending with ``today``'s."""
    current = today.replace(day=1)
    return [_add_months(current, offset) for offset in range(-(months - 1), 1)]


def _net(transactions: Iterable[Transaction]) -> Decimal:
    return sum((cash_effect(t) for t in transactions), ZERO)


def project_cash_flow(
    transactions: Sequence[Transaction],
    months: Optional[int] = None,
    include_opening_balance: bool = True,
    *,
    today: Optional[date] = None,
) -> List[CashFlowPoint]:
    """Return one running-balance point per month, oldest first."""
    months = months if months is not None else get_settings().cash_flow_months
    if months < 1:
        raise ValueError("Cash flow projection requires at least one month")
    today = today or date.today()

    starts = month_starts(today, months)
    window_start = starts[0]
    window_end = _add_months(starts[-1], 1)

    balance = ZERO
    if include_opening_balance:
        balance = _net(t for t in transactions if t.transaction_date < window_start)

    buckets = {start: [] for start in starts}
    for transaction in transactions:
        day = transaction.transaction_date
        if window_start <= day < window_end:
            buckets[day.replace(day=1)].append(transaction)

    points: List[CashFlowPoint] = []
    for start in starts:
        net_flow = _net(buckets[start])
        balance += net_flow
        points.append(
            CashFlowPoint(
                month=start.strftime(MONTH_LABEL_FORMAT),
                month_start=start,
                net_flow=net_flow,
                balance=balance,
            )
        )
    LOGGER.debug(
        "Projected %d months of cash flow ending %s", months, starts[-1].isoformat()
    )
    return points


__all__ = ["project_cash_flow", "cash_effect", "month_starts", "INFLOW_TYPES", "OUTFLOW_TYPES"]
