"""GET /v1/groups/{group_id}/loans and /v1/loans/{loan_id}/balance - loan balances"""

import time
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from natillera_gateway.api.v1.schemas import LoanBalanceResponse, LoansResponse
from natillera_gateway.api.v1.presenters import loan_item, loan_payment_item, loan_portfolio_schema, money
from natillera_gateway.api.dependencies import get_backend_client, get_request_id
from natillera_gateway.api.errors import to_http_exception
from natillera_gateway.infrastructure.clients.backend import NatilleraBackendClient
from natillera_gateway.domain.loans import approved_payments_total, summarize_loans
from natillera_gateway.infrastructure.observability.metrics import record_summary
from natillera_gateway.infrastructure.observability.logging import log_summary

router = APIRouter()


@router.get("/groups/{group_id}/loans", response_model=LoansResponse)
async def get_group_loans(
    group_id: int,
    request: Request,
    referrer_id: Optional[int] = Query(None, description="Only loans referred by this member"),
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """
    Loans of a group with simple-interest balances and portfolio totals.

    Portfolio totals only count approved loans.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        loans = await backend.get_loans(group_id, referrer_id=referrer_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    summary = summarize_loans(loans)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("loans", len(loans))
    log_summary(request_id, group_id, "loans", len(loans), duration_ms)

    return LoansResponse(
        group_id=group_id,
        summary=loan_portfolio_schema(summary),
        loans=[loan_item(loan) for loan in loans],
    )


@router.get("/loans/{loan_id}/balance", response_model=LoanBalanceResponse)
async def get_loan_balance(
    loan_id: int,
    request: Request,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """
    Balance of one loan next to its payments.

    The outstanding figure follows the backend's paid amount; pending
    payments are listed but never subtracted.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        loan, payments = await backend.get_loan_payments(loan_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    approved_total = approved_payments_total(payments)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("loan_balance", len(payments))
    log_summary(request_id, loan.group_id, "loan_balance", len(payments), duration_ms)

    return LoanBalanceResponse(
        loan=loan_item(loan),
        payments=[loan_payment_item(p) for p in payments],
        approved_payments_total=float(approved_total),
        approved_payments_total_display=money(approved_total),
    )
