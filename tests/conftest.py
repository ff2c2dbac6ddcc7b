from datetime import date
from decimal import Decimal
from typing import List

import pytest

from ledgercore.accounting import Account, AccountRegistry, JournalEntry, Transaction


def entry(code: str, debit: str = "0", credit: str = "0", description: str | None = None) -> JournalEntry:
    return JournalEntry(
        account_code=code,
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        description=description,
    )


@pytest.fixture()
def accounts() -> List[Account]:
    return [
        Account(code="1000", name="Cash", type="asset", normal_balance="debit"),
        Account(code="1200", name="Accounts Receivable", type="asset", normal_balance="debit"),
        Account(code="2000", name="Accounts Payable", type="liability", normal_balance="credit"),
        Account(code="3000", name="Share Capital", type="equity", normal_balance="credit"),
        Account(code="4000", name="Sales Revenue", type="revenue", normal_balance="credit"),
        Account(code="5000", name="Operating Expenses", type="expense", normal_balance="debit"),
    ]


@pytest.fixture()
def registry(accounts: List[Account]) -> AccountRegistry:
    return AccountRegistry(accounts)


@pytest.fixture()
def invoice() -> Transaction:
    return Transaction(
        id="T1",
        transaction_date=date(2026, 1, 10),
        transaction_type="sale",
        description="Invoice INV-001",
        reference_number="INV-001",
        total_amount=Decimal("1000"),
        entries=(entry("1200", debit="1000"), entry("4000", credit="1000")),
    )


@pytest.fixture()
def collection() -> Transaction:
    return Transaction(
        id="T2",
        transaction_date=date(2026, 1, 20),
        transaction_type="receipt",
        description="Payment for INV-001",
        reference_number="RCT-001",
        total_amount=Decimal("400"),
        entries=(entry("1000", debit="400"), entry("1200", credit="400")),
    )


@pytest.fixture()
def capital() -> Transaction:
    return Transaction(
        id="T0",
        transaction_date=date(2026, 1, 2),
        transaction_type="journal",
        description="Owner contribution",
        entries=(entry("1000", debit="5000"), entry("3000", credit="5000")),
    )


@pytest.fixture()
def history(capital: Transaction, invoice: Transaction, collection: Transaction) -> List[Transaction]:
    supplies = Transaction(
        id="T3",
        transaction_date=date(2026, 2, 3),
        transaction_type="expense",
        total_amount=Decimal("250"),
        entries=(entry("5000", debit="250"), entry("2000", credit="250")),
    )
    return [capital, invoice, collection, supplies]
