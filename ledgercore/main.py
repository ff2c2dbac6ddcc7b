"""FastAPI application exposing the ledger core reports."""
from __future__ import annotations

import logging
from datetime import date
from typing import List

from fastapi import Depends, FastAPI, HTTPException

from ledgercore.accounting import (
    build_balance_sheet,
    build_income_statement,
    build_ledger,
    build_trial_balance,
    project_cash_flow,
)
from ledgercore.config import AppSettings, get_settings
from ledgercore.schemas import (
    AsOfRequest,
    BalanceSheetResponse,
    CashFlowPointModel,
    CashFlowRequest,
    HealthResponse,
    IncomeStatementResponse,
    LedgerRequest,
    LedgerResponse,
    TrialBalanceResponse,
)

LOGGER = logging.getLogger(__name__)

_settings = get_settings()
logging.basicConfig(level=_settings.log_level)

app = FastAPI(title=_settings.app_name, version="0.1.0")


@app.get("/api/health", response_model=HealthResponse)
def health(settings: AppSettings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", app_name=settings.app_name)


@app.post("/api/reports/ledger", response_model=LedgerResponse)
def ledger_report(
    payload: LedgerRequest,
    settings: AppSettings = Depends(get_settings),
) -> LedgerResponse:
    try:
        report = build_ledger(
            payload.domain_accounts(),
            payload.domain_transactions(),
            payload.window(),
            epsilon=settings.balance_epsilon,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return LedgerResponse.from_domain(report, settings.display_precision)


@app.post("/api/reports/trial-balance", response_model=TrialBalanceResponse)
def trial_balance(
    payload: AsOfRequest,
    settings: AppSettings = Depends(get_settings),
) -> TrialBalanceResponse:
    try:
        trial = build_trial_balance(
            payload.domain_accounts(),
            payload.domain_transactions(),
            payload.as_of_date or date.today(),
            epsilon=settings.balance_epsilon,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return TrialBalanceResponse.from_domain(trial, settings.display_precision)


@app.post("/api/reports/balance-sheet", response_model=BalanceSheetResponse)
def balance_sheet(
    payload: AsOfRequest,
    settings: AppSettings = Depends(get_settings),
) -> BalanceSheetResponse:
    try:
        sheet = build_balance_sheet(
            payload.domain_accounts(),
            payload.domain_transactions(),
            payload.as_of_date or date.today(),
            epsilon=settings.balance_epsilon,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return BalanceSheetResponse.from_domain(sheet, settings.display_precision)


@app.post("/api/reports/income-statement", response_model=IncomeStatementResponse)
def income_statement(
    payload: LedgerRequest,
    settings: AppSettings = Depends(get_settings),
) -> IncomeStatementResponse:
    try:
        statement = build_income_statement(
            payload.domain_accounts(),
            payload.domain_transactions(),
            payload.window(),
            epsilon=settings.balance_epsilon,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return IncomeStatementResponse.from_domain(statement, settings.display_precision)

@app.post("/api/reports/cash-flow", response_model=List[CashFlowPointModel])
def cash_flow(
    payload: CashFlowRequest,
    settings: AppSettings = Depends(get_settings),
) -> List[CashFlowPointModel]:
    try:
        points = project_cash_flow(
            payload.domain_transactions(),
            payload.months if payload.months is not None else settings.cash_flow_months,
            payload.include_opening_balance,
            today=payload.today,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [CashFlowPointModel.from_domain(point, settings.display_precision) for point in points]
