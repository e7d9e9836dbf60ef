"""GET /v1/groups/{group_id}/transactions and /balance - ledger views"""

import time
from datetime import date
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from natillera_gateway.api.v1.schemas import BalanceResponse, TransactionsResponse
from natillera_gateway.api.v1.presenters import money, transaction_item
from natillera_gateway.api.dependencies import get_backend_client, get_request_id
from natillera_gateway.api.errors import to_http_exception
from natillera_gateway.config import settings
from natillera_gateway.infrastructure.clients.backend import NatilleraBackendClient
from natillera_gateway.domain.models import ALL, TransactionCriteria
from natillera_gateway.domain.transactions import distinct_actors, filter_transactions, totals_by_type
from natillera_gateway.infrastructure.observability.metrics import record_summary
from natillera_gateway.infrastructure.observability.logging import log_summary

router = APIRouter()


@router.get("/groups/{group_id}/transactions", response_model=TransactionsResponse)
async def get_transactions(
    group_id: int,
    request: Request,
    type: str = Query(ALL, description="Ledger code (ingreso, gasto, ...) or 'all'"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None, description="Inclusive, covers the whole day"),
    amount_min: Optional[Decimal] = Query(None),
    amount_max: Optional[Decimal] = Query(None),
    actor: str = Query(ALL, description="Actor display name or 'all'"),
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """
    Filtered ledger of a group.

    The actor choice list is built from the unfiltered ledger; the totals
    per type cover the filtered rows.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        transactions = await backend.get_transactions(group_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    criteria = TransactionCriteria(
        type=type,
        date_from=date_from,
        date_to=date_to,
        amount_min=amount_min,
        amount_max=amount_max,
        actor=actor,
    )
    matching = filter_transactions(transactions, criteria, settings.system_actor_name)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("transactions", len(transactions))
    log_summary(request_id, group_id, "transactions", len(transactions), duration_ms)

    return TransactionsResponse(
        group_id=group_id,
        count=len(matching),
        transactions=[transaction_item(t) for t in matching],
        actors=distinct_actors(transactions, settings.system_actor_name),
        totals_by_type={kind.value: float(total) for kind, total in totals_by_type(matching).items()},
    )


@router.get("/groups/{group_id}/balance", response_model=BalanceResponse)
async def get_balance(
    group_id: int,
    request: Request,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """Backend balance snapshot, passed through with formatted amounts"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        balance = await backend.get_balance(group_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    figures = {
        "cash": balance.cash,
        "loans_outstanding": balance.loans_outstanding,
        "income": balance.income,
        "expenses": balance.expenses,
        "available_capital": balance.available_capital,
    }

    duration_ms = (time.time() - start_time) * 1000
    record_summary("balance", 1)
    log_summary(request_id, group_id, "balance", 1, duration_ms)

    return BalanceResponse(
        group_id=group_id,
        display={name: money(value) for name, value in figures.items()},
        **{name: float(value) for name, value in figures.items()},
    )
