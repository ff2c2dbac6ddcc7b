from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ledgercore.accounting import (
    DateWindow,
    InvalidDateRange,
    JournalEntry,
    MissingAccountRegistry,
    Transaction,
    build_ledger,
)


def _transfer(tx_id: str, day: date, debit_code: str, credit_code: str, amount: str, **extra) -> Transaction:
    return Transaction(
        id=tx_id,
        transaction_date=day,
        transaction_type="journal",
        description=f"Transfer {tx_id}",
        entries=(
            JournalEntry(debit_code, debit_amount=Decimal(amount)),
            JournalEntry(credit_code, credit_amount=Decimal(amount)),
        ),
        **extra,
    )


def test_receivable_summary(accounts, invoice: Transaction, collection: Transaction) -> None:
    report = build_ledger(accounts, [invoice, collection])
    receivable = report.summary_for("1200")
    assert receivable.total_debits == Decimal("1000")
    assert receivable.total_credits == Decimal("400")
    assert receivable.closing_balance == Decimal("600")
    assert [line.running_balance for line in report.ledger_lines["1200"]] == [
        Decimal("1000"),
        Decimal("600"),
    ]


def test_credit_normal_accounts_grow_with_credits(accounts, invoice: Transaction) -> None:
    report = build_ledger(accounts, [invoice])
    assert report.summary_for("4000").closing_balance == Decimal("1000")


def test_closing_balance_matches_last_running_balance(
    accounts, capital: Transaction, invoice: Transaction, collection: Transaction
) -> None:
    report = build_ledger(accounts, [collection, capital, invoice])
    for summary in report.summaries:
        assert report.ledger_lines[summary.code][-1].running_balance == summary.closing_balance


def test_summaries_ordered_by_code_and_skip_idle_accounts(accounts, invoice: Transaction) -> None:
    report = build_ledger(accounts, [invoice])
    assert [summary.code for summary in report.summaries] == ["1200", "4000"]
    assert set(report.ledger_lines) == {"1200", "4000"}


def test_ledger_line_fields(accounts, invoice: Transaction) -> None:
    line = build_ledger(accounts, [invoice]).ledger_lines["1200"][0]
    assert line.date == date(2026, 1, 10)
    assert line.reference == "INV-001"
    assert line.description == "Invoice INV-001"
    assert line.debit == Decimal("1000")
    assert line.credit == Decimal("0")
    assert line.transaction_id == "T1"


def test_entry_description_overrides_transaction(accounts) -> None:
    transaction = Transaction(
        id="T5",
        transaction_date=date(2026, 1, 5),
        transaction_type="expense",
        description="Office costs",
        entries=(
            JournalEntry("5000", debit_amount=Decimal("75"), description="Printer paper"),
            JournalEntry("1000", credit_amount=Decimal("75")),
        ),
    )
    lines = build_ledger(accounts, [transaction]).ledger_lines
    assert lines["5000"][0].description == "Printer paper"
    assert lines["1000"][0].description == "Office costs"


def test_entry_with_both_sides(accounts) -> None:
    transaction = Transaction(
        id="T6",
        transaction_date=date(2026, 1, 5),
        transaction_type="journal",
        entries=(
            JournalEntry("1000", debit_amount=Decimal("100"), credit_amount=Decimal("40")),
            JournalEntry("4000", credit_amount=Decimal("60")),
        ),
    )
    cash = build_ledger(accounts, [transaction]).summary_for("1000")
    assert cash.total_debits == Decimal("100")
    assert cash.total_credits == Decimal("40")
    assert cash.closing_balance == Decimal("60")


def test_window_restricts_activity_and_starts_at_zero(
    accounts, invoice: Transaction, collection: Transaction
) -> None:
    window = DateWindow(start=date(2026, 1, 15), end=date(2026, 1, 31))
    report = build_ledger(accounts, [invoice, collection], window)
    receivable = report.summary_for("1200")
    assert receivable.total_debits == Decimal("0")
    assert receivable.closing_balance == Decimal("-400")
    assert report.summary_for("4000") is None


def test_window_bounds_are_inclusive(accounts, invoice: Transaction, collection: Transaction) -> None:
    window = DateWindow(start=date(2026, 1, 10), end=date(2026, 1, 20))
    report = build_ledger(accounts, [invoice, collection], window)
    assert len(report.ledger_lines["1200"]) == 2


def test_invalid_window_is_rejected() -> None:
    with pytest.raises(InvalidDateRange):
        DateWindow(start=date(2026, 2, 1), end=date(2026, 1, 1))


def test_missing_registry_is_fatal(invoice: Transaction) -> None:
    with pytest.raises(MissingAccountRegistry):
        build_ledger(None, [invoice])


def test_empty_history(accounts) -> None:
    report = build_ledger(accounts, [])
    assert report.summaries == ()
    assert dict(report.ledger_lines) == {}
    assert report.diagnostics.is_clean


def test_unbalanced_transaction_is_excluded(accounts, invoice: Transaction) -> None:
    bad = Transaction(
        id="BAD",
        transaction_date=date(2026, 1, 12),
        transaction_type="sale",
        entries=(
            JournalEntry("1200", debit_amount=Decimal("100")),
            JournalEntry("4000", credit_amount=Decimal("90")),
        ),
    )
    report = build_ledger(accounts, [invoice, bad])
    assert report.summary_for("1200").closing_balance == Decimal("1000")
    assert [finding.transaction_id for finding in report.diagnostics.unbalanced] == ["BAD"]


def test_unmapped_entry_is_reported(accounts, capital: Transaction) -> None:
    orphan = _transfer("T7", date(2026, 1, 3), "9999", "1000", "50")
    report = build_ledger(accounts, [capital, orphan])
    assert report.summary_for("1000").closing_balance == Decimal("4950")
    assert report.diagnostics.unmapped[0].account_code == "9999"


def test_same_date_keeps_input_order(accounts) -> None:
    sale = _transfer("A", date(2026, 3, 1), "1000", "4000", "100")
    spend = _transfer("B", date(2026, 3, 1), "5000", "1000", "30")
    forward = build_ledger(accounts, [sale, spend]).ledger_lines["1000"]
    reverse = build_ledger(accounts, [spend, sale]).ledger_lines["1000"]
    assert [line.running_balance for line in forward] == [Decimal("100"), Decimal("70")]
    assert [line.running_balance for line in reverse] == [Decimal("-30"), Decimal("70")]


def test_same_date_orders_by_creation_time(accounts) -> None:
    sale = _transfer(
        "A", date(2026, 3, 1), "1000", "4000", "100", created_at=datetime(2026, 3, 1, 15, 0)
    )
    spend = _transfer(
        "B", date(2026, 3, 1), "5000", "1000", "30", created_at=datetime(2026, 3, 1, 9, 0)
    )
    lines = build_ledger(accounts, [sale, spend]).ledger_lines["1000"]
    assert [line.transaction_id for line in lines] == ["B", "A"]


def test_creation_times_compare_across_offsets(accounts) -> None:
    day = date(2026, 3, 1)
    # 10:00+02:00 is 08:00Z, an hour before the UTC stamp
    local = datetime(2026, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    utc = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    first = _transfer("A", day, "1000", "4000", "100", created_at=local)
    second = _transfer("B", day, "5000", "1000", "30", created_at=utc)
    lines = build_ledger(accounts, [second, first]).ledger_lines["1000"]
    assert [line.transaction_id for line in lines] == ["A", "B"]


def test_naive_creation_time_is_read_as_utc(accounts) -> None:
    day = date(2026, 3, 1)
    aware = _transfer(
        "A", day, "1000", "4000", "100", created_at=datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
    )
    naive = _transfer("B", day, "5000", "1000", "30", created_at=datetime(2026, 3, 1, 9, 30))
    lines = build_ledger(accounts, [aware, naive]).ledger_lines["1000"]
    assert [line.transaction_id for line in lines] == ["B", "A"]


def test_permuted_input_with_distinct_dates_is_identical(
    accounts, capital: Transaction, invoice: Transaction, collection: Transaction
) -> None:
    first = build_ledger(accounts, [capital, invoice, collection])
    second = build_ledger(accounts, [collection, invoice, capital])
    assert first.summaries == second.summaries
    assert dict(first.ledger_lines) == dict(second.ledger_lines)


def test_full_precision_is_kept(accounts) -> None:
    transactions = [
        _transfer(f"R{i}", date(2026, 1, i + 1), "1000", "4000", "0.333") for i in range(3)
    ]
    report = build_ledger(accounts, transactions)
    assert report.summary_for("1000").closing_balance == Decimal("0.999")


def test_output_is_read_only(accounts, invoice: Transaction) -> None:
    report = build_ledger(accounts, [invoice])
    with pytest.raises(TypeError):
        report.ledger_lines["9999"] = ()
