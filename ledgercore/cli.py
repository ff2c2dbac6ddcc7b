"""Command line interface for running ledger reports over a JSON snapshot."""
from __future__ import annotations

import argparse
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict

from ledgercore.accounting import (
    build_balance_sheet,
    build_income_statement,
    build_ledger,
    build_trial_balance,
    project_cash_flow,
)
from ledgercore.config import get_settings
from ledgercore.schemas import (
    BalanceSheetResponse,
    CashFlowPointModel,
    IncomeStatementResponse,
    LedgerRequest,
    LedgerResponse,
    TrialBalanceResponse,
)

LOGGER = logging.getLogger(__name__)

REPORTS = ("ledger", "trial-balance", "balance-sheet", "income-statement", "cash-flow")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Double-entry ledger reports")
    parser.add_argument("report", choices=REPORTS, help="Report to build")
    parser.add_argument("snapshot", type=Path, help="JSON file with accounts and transactions")
    parser.add_argument("-o", "--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument("--start", type=date.fromisoformat, help="Report window start (inclusive)")
    parser.add_argument("--end", type=date.fromisoformat, help="Report window end (inclusive)")
    parser.add_argument("--as-of", type=date.fromisoformat, help="Snapshot date, defaults to today")
    parser.add_argument("--months", type=int, help="Number of months in the cash-flow series")
    parser.add_argument(
        "--no-opening-balance",
        action="store_true",
        help="Start the cash-flow series at zero",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def run_report(args: argparse.Namespace) -> Any:
    settings = get_settings()
    quantum = settings.display_precision
    raw: Dict[str, Any] = json.loads(args.snapshot.read_text(encoding="utf-8"))
    request = LedgerRequest.model_validate({**raw, "start": args.start, "end": args.end})
    accounts = request.domain_accounts()
    transactions = request.domain_transactions()
    as_of = args.as_of or date.today()

    if args.report == "ledger":
        report = build_ledger(accounts, transactions, request.window())
        return LedgerResponse.from_domain(report, quantum).model_dump(mode="json")
    if args.report == "trial-balance":
        trial = build_trial_balance(accounts, transactions, as_of)
        return TrialBalanceResponse.from_domain(trial, quantum).model_dump(mode="json")
    if args.report == "balance-sheet":
        sheet = build_balance_sheet(accounts, transactions, as_of)
        return BalanceSheetResponse.from_domain(sheet, quantum).model_dump(mode="json")
    if args.report == "income-statement":
        statement = build_income_statement(accounts, transactions, request.window())
        return IncomeStatementResponse.from_domain(statement, quantum).model_dump(mode="json")
    points = project_cash_flow(
        transactions,
        args.months,
        not args.no_opening_balance,
        today=args.as_of,
    )
    return [CashFlowPointModel.from_domain(point, quantum).model_dump(mode="json") for point in points]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else get_settings().log_level)
    try:
        payload = run_report(args)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 2
    content = json.dumps(payload, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(content, encoding="utf-8")
        LOGGER.info("Report written to %s", args.output)
    else:
        print(content)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
