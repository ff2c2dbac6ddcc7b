"""Pydantic schemas for the ledger core HTTP and CLI surfaces."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ledgercore.accounting import (
    Account,
    BalanceSheet,
    CashFlowPoint,
    DateWindow,
    Diagnostics,
    IncomeStatement,
    JournalEntry,
    LedgerReport,
    Transaction,
    TrialBalance,
)

AccountType = Literal["asset", "liability", "equity", "revenue", "expense"]
BalanceSide = Literal["debit", "credit"]
PostingDate = date


def _quantize(value: Decimal, quantum: Decimal) -> Decimal:
    return Decimal(value).quantize(quantum)


# ----------------------------------------------------------------------
# Inputs
# ----------------------------------------------------------------------
class AccountModel(BaseModel):
    code: str = Field(..., description="Unique account code")
    name: str
    type: AccountType
    normal_balance: Optional[BalanceSide] = None

    def to_domain(self) -> Account:
        return Account(
            code=self.code,
            name=self.name,
            type=self.type,
            normal_balance=self.normal_balance,
        )


class JournalEntryModel(BaseModel):
    account_code: Optional[str] = None
    debit_amount: Decimal = Field(default=Decimal("0"), ge=0)
    credit_amount: Decimal = Field(default=Decimal("0"), ge=0)
    description: Optional[str] = None

    @field_validator("debit_amount", "credit_amount", mode="before")
    @classmethod
    def _normalize_amount(cls, value: Decimal | float | int | str | None) -> Decimal:
        if value is None or value == "":
            return Decimal("0")
        return Decimal(str(value))

    def to_domain(self) -> JournalEntry:
        return JournalEntry(
            account_code=self.account_code,
            debit_amount=self.debit_amount,
            credit_amount=self.credit_amount,
            description=self.description,
        )


class TransactionModel(BaseModel):
    id: str
    transaction_date: date
    transaction_type: str
    description: str = ""
    reference_number: Optional[str] = None
    total_amount: Decimal = Decimal("0")
    status: str = "posted"
    created_at: Optional[datetime] = None
    journal_entries: List[JournalEntryModel] = Field(default_factory=list)

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _date_only(cls, value: date | datetime | str) -> date | str:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    @field_validator("total_amount", mode="before")
    @classmethod
    def _normalize_total(cls, value: Decimal | float | int | str | None) -> Decimal:
        if value is None or value == "":
            return Decimal("0")
        return Decimal(str(value))

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            transaction_date=self.transaction_date,
            transaction_type=self.transaction_type,
            entries=tuple(entry.to_domain() for entry in self.journal_entries),
            description=self.description,
            reference_number=self.reference_number,
            total_amount=self.total_amount,
            status=self.status,
            created_at=self.created_at,
        )


class LedgerSnapshot(BaseModel):
    """Accounts and transactions as loaded by the calling collaborator."""

    accounts: List[AccountModel] = Field(default_factory=list)
    transactions: List[TransactionModel] = Field(default_factory=list)

    def domain_accounts(self) -> List[Account]:
        return [account.to_domain() for account in self.accounts]

    def domain_transactions(self) -> List[Transaction]:
        return [transaction.to_domain() for transaction in self.transactions]


class LedgerRequest(LedgerSnapshot):
    start: Optional[date] = None
    end: Optional[date] = None

    def window(self) -> DateWindow:
        return DateWindow(start=self.start, end=self.end)


class AsOfRequest(LedgerSnapshot):
    as_of_date: Optional[date] = None


class CashFlowRequest(BaseModel):
    transactions: List[TransactionModel] = Field(default_factory=list)
    months: Optional[int] = None
    include_opening_balance: bool = True
    today: Optional[date] = None

    def domain_transactions(self) -> List[Transaction]:
        return [transaction.to_domain() for transaction in self.transactions]


# ----------------------------------------------------------------------
# Outputs
# ----------------------------------------------------------------------
class DiagnosticModel(BaseModel):
    kind: str
    message: str
    transaction_id: Optional[str] = None
    account_code: Optional[str] = None


class DiagnosticsResponse(BaseModel):
    items: List[DiagnosticModel]
    skipped_unposted: int

    @classmethod
    def from_domain(cls, diagnostics: Diagnostics) -> "DiagnosticsResponse":
        return cls(
            items=[
                DiagnosticModel(
                    kind=finding.kind,
                    message=finding.message(),
                    transaction_id=getattr(finding, "transaction_id", None),
                    account_code=getattr(finding, "account_code", None),
                )
                for finding in diagnostics.all()
            ],
            skipped_unposted=diagnostics.skipped_unposted,
        )


class LedgerLineModel(BaseModel):
    date: PostingDate
    description: str
    reference: Optional[str] = None
    debit: Decimal
    credit: Decimal
    running_balance: Decimal
    transaction_id: str


class AccountSummaryModel(BaseModel):
    code: str
    name: str
    type: AccountType
    normal_balance: BalanceSide
    total_debits: Decimal
    total_credits: Decimal
    closing_balance: Decimal


class LedgerResponse(BaseModel):
    summaries: List[AccountSummaryModel]
    ledger_lines: Dict[str, List[LedgerLineModel]]
    diagnostics: DiagnosticsResponse

    @classmethod
    def from_domain(cls, report: LedgerReport, quantum: Decimal) -> "LedgerResponse":
        return cls(
            summaries=[
                AccountSummaryModel(
                    code=summary.code,
                    name=summary.name,
                    type=summary.type,
                    normal_balance=summary.normal_balance,
                    total_debits=_quantize(summary.total_debits, quantum),
                    total_credits=_quantize(summary.total_credits, quantum),
                    closing_balance=_quantize(summary.closing_balance, quantum),
                )
                for summary in report.summaries
            ],
            ledger_lines={
                code: [
                    LedgerLineModel(
                        date=line.date,
                        description=line.description,
                        reference=line.reference,
                        debit=_quantize(line.debit, quantum),
                        credit=_quantize(line.credit, quantum),
                        running_balance=_quantize(line.running_balance, quantum),
                        transaction_id=line.transaction_id,
                    )
                    for line in lines
                ]
                for code, lines in report.ledger_lines.items()
            },
            diagnostics=DiagnosticsResponse.from_domain(report.diagnostics),
        )


class TrialBalanceRowModel(BaseModel):
    code: str
    name: str
    type: AccountType
    debit: Decimal
    credit: Decimal


class TrialBalanceResponse(BaseModel):
    as_of_date: date
    rows: List[TrialBalanceRowModel]
    total_debit: Decimal
    total_credit: Decimal
    variance: Decimal
    is_balanced: bool
    accounts_with_activity: int
    total_accounts: int
    diagnostics: DiagnosticsResponse

    @classmethod
    def from_domain(cls, trial: TrialBalance, quantum: Decimal) -> "TrialBalanceResponse":
        return cls(
            as_of_date=trial.as_of_date,
            rows=[
                TrialBalanceRowModel(
                    code=row.code,
                    name=row.name,
                    type=row.type,
                    debit=_quantize(row.debit, quantum),
                    credit=_quantize(row.credit, quantum),
                )
                for row in trial.rows
            ],
            total_debit=_quantize(trial.total_debit, quantum),
            total_credit=_quantize(trial.total_credit, quantum),
            variance=_quantize(trial.variance, quantum),
            is_balanced=trial.is_balanced,
            accounts_with_activity=trial.accounts_with_activity,
            total_accounts=trial.total_accounts,
            diagnostics=DiagnosticsResponse.from_domain(trial.diagnostics),
        )


class BalanceSheetSection(BaseModel):
    total: Decimal
    accounts: Dict[str, Decimal]


class BalanceSheetResponse(BaseModel):
    as_of_date: date
    assets: BalanceSheetSection
    liabilities: BalanceSheetSection
    equity: BalanceSheetSection
    current_earnings: Decimal
    is_balanced: bool
    diagnostics: DiagnosticsResponse

    @classmethod
    def from_domain(cls, sheet: BalanceSheet, quantum: Decimal) -> "BalanceSheetResponse":
        def section(accounts: Mapping[str, Decimal], total: Decimal) -> BalanceSheetSection:
            return BalanceSheetSection(
                accounts={k: _quantize(v, quantum) for k, v in accounts.items()},
                total=_quantize(total, quantum),
            )

        return cls(
            as_of_date=sheet.as_of_date,
            assets=section(sheet.assets, sheet.total_assets),
            liabilities=section(sheet.liabilities, sheet.total_liabilities),
            equity=section(sheet.equity, sheet.total_equity),
            current_earnings=_quantize(sheet.current_earnings, quantum),
            is_balanced=sheet.is_balanced,
            diagnostics=DiagnosticsResponse.from_domain(sheet.diagnostics),
        )


class IncomeStatementSection(BaseModel):
    total: Decimal
    accounts: Dict[str, Decimal]


class IncomeStatementResponse(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None
    revenue: IncomeStatementSection
    expenses: IncomeStatementSection
    net_income: Decimal
    diagnostics: DiagnosticsResponse

    @classmethod
    def from_domain(
        cls, statement: IncomeStatement, quantum: Decimal
    ) -> "IncomeStatementResponse":
        def section(accounts: Mapping[str, Decimal], total: Decimal) -> IncomeStatementSection:
            return IncomeStatementSection(
                accounts={k: _quantize(v, quantum) for k, v in accounts.items()},
                total=_quantize(total, quantum),
            )

        return cls(
            start=statement.window.start,
            end=statement.window.end,
            revenue=section(statement.revenue, statement.total_revenue),
            expenses=section(statement.expenses, statement.total_expenses),
            net_income=_quantize(statement.net_income, quantum),
            diagnostics=DiagnosticsResponse.from_domain(statement.diagnostics),
        )

class CashFlowPointModel(BaseModel):
    month: str
    month_start: date
    net_flow: Decimal
    balance: Decimal

    @classmethod
    def from_domain(cls, point: CashFlowPoint, quantum: Decimal) -> "CashFlowPointModel":
        return cls(
            month=point.month,
            month_start=point.month_start,
            net_flow=_quantize(point.net_flow, quantum),
            balance=_quantize(point.balance, quantum),
        )


class HealthResponse(BaseModel):
    status: str
    app_name: str
