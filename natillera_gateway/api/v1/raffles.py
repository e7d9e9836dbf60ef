"""GET /v1/raffles/{raffle_id}/tickets/summary - raffle ticket counts"""

import time
from fastapi import APIRouter, Depends, Request

from natillera_gateway.api.v1.schemas import RaffleSummaryResponse
from natillera_gateway.api.dependencies import get_backend_client, get_request_id
from natillera_gateway.api.errors import to_http_exception
from natillera_gateway.infrastructure.clients.backend import NatilleraBackendClient
from natillera_gateway.domain.raffles import summarize_tickets
from natillera_gateway.infrastructure.observability.metrics import record_summary
from natillera_gateway.infrastructure.observability.logging import log_summary

router = APIRouter()


@router.get("/raffles/{raffle_id}/tickets/summary", response_model=RaffleSummaryResponse)
async def get_ticket_summary(
    raffle_id: int,
    request: Request,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """Available, taken, paid and unpaid ticket counts for the organizer"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        tickets = await backend.get_raffle_tickets(raffle_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    summary = summarize_tickets(tickets)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("raffle", len(tickets))
    log_summary(request_id, raffle_id, "raffle", len(tickets), duration_ms)

    return RaffleSummaryResponse(
        raffle_id=raffle_id,
        total=summary.total,
        available=summary.available,
        taken=summary.taken,
        paid=summary.paid,
        pending_payment=summary.pending_payment,
    )
