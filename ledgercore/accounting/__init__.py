"""Double-entry aggregation core: ledger, trial balance and cash-flow rollups."""

from .balance_sheet import build_balance_sheet
from .cash_flow import project_cash_flow
from .errors import (
    InvalidDateRange,
    LedgerCoreError,
    MissingAccountRegistry,
    TrialBalanceImbalance,
    TrialBalanceOutOfBalance,
    UnbalancedTransaction,
    UnmappedAccountCode,
)
from .income_statement import build_income_statement
from .ledger import build_ledger
from .models import (
    Account,
    AccountSummary,
    BalanceSheet,
    CashFlowPoint,
    DateWindow,
    Diagnostics,
    IncomeStatement,
    JournalEntry,
    LedgerLine,
    LedgerReport,
    Transaction,
    TrialBalance,
    TrialBalanceRow,
)
from .registry import AccountRegistry
from .trial_balance import build_trial_balance
from .validator import JournalValidator, ValidationResult

__all__ = [
    "build_ledger",
    "build_trial_balance",
    "build_balance_sheet",
    "build_income_statement",
    "project_cash_flow",
    "AccountRegistry",
    "JournalValidator",
    "ValidationResult",
    "Account",
    "AccountSummary",
    "BalanceSheet",
    "CashFlowPoint",
    "DateWindow",
    "Diagnostics",
    "IncomeStatement",
    "JournalEntry",
    "LedgerLine",
    "LedgerReport",
    "Transaction",
    "TrialBalance",
    "TrialBalanceRow",
    "LedgerCoreError",
    "InvalidDateRange",
    "MissingAccountRegistry",
    "TrialBalanceOutOfBalance",
    "TrialBalanceImbalance",
    "UnbalancedTransaction",
    "UnmappedAccountCode",
]
