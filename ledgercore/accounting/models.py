"""Value types consumed and produced by the accounting core."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Literal, Mapping, Optional, Tuple

from .errors import (
    InvalidDateRange,
    TrialBalanceImbalance,
    TrialBalanceOutOfBalance,
    UnbalancedTransaction,
    UnmappedAccountCode,
)

AccountType = Literal["asset", "liability", "equity", "revenue", "expense"]
BalanceSide = Literal["debit", "credit"]

ACCOUNT_TYPES = ("asset", "liability", "equity", "revenue", "expense")
POSTED = "posted"
ZERO = Decimal("0")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a monetary input to ``Decimal`` without rounding it."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# ----------------------------------------------------------------------
# Inputs
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Account:
    """A chart-of-accounts entry."""

    code: str
    name: str
    type: AccountType
    normal_balance: Optional[BalanceSide] = "debit"

    def __post_init__(self) -> None:
        if self.type not in ACCOUNT_TYPES:
            raise ValueError(f"Unknown account type '{self.type}' for account '{self.code}'")
        if not self.normal_balance:
            object.__setattr__(self, "normal_balance", "debit")
        elif self.normal_balance not in {"debit", "credit"}:
            raise ValueError("Normal balance must be either 'debit' or 'credit'")


@dataclass(frozen=True)
class JournalEntry:
    """One debit and/or credit line of a transaction."""

    account_code: Optional[str]
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "debit_amount", to_decimal(self.debit_amount))
        object.__setattr__(self, "credit_amount", to_decimal(self.credit_amount))


@dataclass(frozen=True)
class Transaction:
    """A posted business event made of journal entries."""

    id: str
    transaction_date: date
    transaction_type: str
    entries: Tuple[JournalEntry, ...] = ()
    description: str = ""
    reference_number: Optional[str] = None
    total_amount: Decimal = ZERO
    status: str = POSTED
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transaction_date", to_date(self.transaction_date))
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "total_amount", to_decimal(self.total_amount))

    @property
    def is_posted(self) -> bool:
        return self.status == POSTED


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start and self.end and self.start > self.end:
            raise InvalidDateRange(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def contains(self, day: date) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True


# ----------------------------------------------------------------------
# Derived values
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class LedgerLine:
    date: date
    description: str
    reference: Optional[str]
    debit: Decimal
    credit: Decimal
    running_balance: Decimal
    transaction_id: str


@dataclass(frozen=True)
class AccountSummary:
    code: str
    name: str
    type: AccountType
    normal_balance: BalanceSide
    total_debits: Decimal
    total_credits: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class Diagnostics:
    """Data-quality findings collected while screening a snapshot."""

    unbalanced: Tuple[UnbalancedTransaction, ...] = ()
    unmapped: Tuple[UnmappedAccountCode, ...] = ()
    integrity: Tuple[TrialBalanceImbalance, ...] = ()
    skipped_unposted: int = 0

    @property
    def is_clean(self) -> bool:
        return not (self.unbalanced or self.unmapped or self.integrity)

    def all(self) -> Tuple[object, ...]:
        return self.unbalanced + self.unmapped + self.integrity


@dataclass(frozen=True)
class LedgerReport:
    summaries: Tuple[AccountSummary, ...]
    ledger_lines: Mapping[str, Tuple[LedgerLine, ...]]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    window: DateWindow = field(default_factory=DateWindow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ledger_lines", MappingProxyType(dict(self.ledger_lines)))

    def summary_for(self, code: str) -> Optional[AccountSummary]:
        return next((summary for summary in self.summaries if summary.code == code), None)


@dataclass(frozen=True)
class TrialBalanceRow:
    code: str
    name: str
    type: AccountType
    balance: Decimal
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    as_of_date: date
    rows: Tuple[TrialBalanceRow, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    total_accounts: int
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def variance(self) -> Decimal:
        return self.total_debit - self.total_credit

    @property
    def accounts_with_activity(self) -> int:
        return len(self.rows)

    def raise_for_imbalance(self) -> None:
        """Raise :class:`TrialBalanceOutOfBalance` if the columns disagree."""
        if not self.is_balanced:
            raise TrialBalanceOutOfBalance(self.total_debit, self.total_credit)

    def imbalance(self) -> Optional[TrialBalanceImbalance]:
        return next(iter(self.diagnostics.integrity), None)


@dataclass(frozen=True)
class BalanceSheet:
    as_of_date: date
    assets: Mapping[str, Decimal]
    liabilities: Mapping[str, Decimal]
    equity: Mapping[str, Decimal]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    current_earnings: Decimal
    is_balanced: bool
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __post_init__(self) -> None:
        for name in ("assets", "liabilities", "equity"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def variance(self) -> Decimal:
        return self.total_assets - (
            self.total_liabilities + self.total_equity + self.current_earnings
        )


@dataclass(frozen=True)
class IncomeStatement:
    window: DateWindow
    revenue: Mapping[str, Decimal]
    expenses: Mapping[str, Decimal]
    total_revenue: Decimal
    total_expenses: Decimal
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __post_init__(self) -> None:
        object.__setattr__(self, "revenue", MappingProxyType(dict(self.revenue)))
        object.__setattr__(self, "expenses", MappingProxyType(dict(self.expenses)))

    @property
    def net_income(self) -> Decimal:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True)
class CashFlowPoint:
    month: str
    month_start: date
    net_flow: Decimal
    balance: Decimal


__all__ = [
    "AccountType",
    "BalanceSide",
    "ACCOUNT_TYPES",
    "Account",
    "JournalEntry",
    "Transaction",
    "DateWindow",
    "LedgerLine",
    "AccountSummary",
    "Diagnostics",
    "LedgerReport",
    "TrialBalanceRow",
    "TrialBalance",
    "BalanceSheet",
    "IncomeStatement",
    "CashFlowPoint",
    "to_decimal",
    "to_date",
]
