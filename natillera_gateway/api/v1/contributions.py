"""GET /v1/groups/{group_id}/contributions/* - contribution summaries"""

import time
from fastapi import APIRouter, Depends, Request

from natillera_gateway.api.v1.schemas import (
    ContributionSummaryResponse,
    MemberShareResponse,
    PendingContributionsResponse,
)
from natillera_gateway.api.v1.presenters import member_contribution_item, money, pending_contribution_item
from natillera_gateway.api.dependencies import get_backend_client, get_request_id
from natillera_gateway.api.errors import to_http_exception
from natillera_gateway.infrastructure.clients.backend import NatilleraBackendClient
from natillera_gateway.domain.contributions import aggregate_contributions, member_share, pending_contributions
from natillera_gateway.infrastructure.observability.metrics import record_summary
from natillera_gateway.infrastructure.observability.logging import log_summary
from natillera_gateway.utils.numbers import ZERO

router = APIRouter()


@router.get("/groups/{group_id}/contributions/summary", response_model=ContributionSummaryResponse)
async def get_contribution_summary(
    group_id: int,
    request: Request,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """
    Approved contributions per member with each member's share of the pool.

    Every roster member is listed, including those with nothing approved yet.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        _, members = await backend.get_group(group_id)
        contributions = await backend.get_contributions(group_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    rows = aggregate_contributions(members, contributions)
    total = sum((row.total_contributed for row in rows), ZERO)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("contributions", len(contributions))
    log_summary(request_id, group_id, "contributions", len(contributions), duration_ms)

    return ContributionSummaryResponse(
        group_id=group_id,
        total=float(total),
        total_display=money(total),
        members=[member_contribution_item(row) for row in rows],
    )


@router.get("/groups/{group_id}/contributions/me", response_model=MemberShareResponse)
async def get_my_contribution_share(
    group_id: int,
    request: Request,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """Calling member's approved total and rounded share of the group pool"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        me = await backend.get_current_member()
        _, members = await backend.get_group(group_id)
        contributions = await backend.get_contributions(group_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    rows = aggregate_contributions(members, contributions)
    group_total = sum((row.total_contributed for row in rows), ZERO)
    my_total = next((row.total_contributed for row in rows if row.member.id == me.id), ZERO)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("member_share", len(contributions))
    log_summary(request_id, group_id, "member_share", len(contributions), duration_ms)

    return MemberShareResponse(
        group_id=group_id,
        member_id=me.id,
        total_contributed=float(my_total),
        total_contributed_display=money(my_total),
        group_total=float(group_total),
        group_total_display=money(group_total),
        percentage=float(member_share(my_total, group_total)),
    )


@router.get("/groups/{group_id}/contributions/pending", response_model=PendingContributionsResponse)
async def get_pending_contributions(
    group_id: int,
    request: Request,
    mine: bool = False,
    backend: NatilleraBackendClient = Depends(get_backend_client),
):
    """Contributions awaiting approval; ``mine=true`` keeps only the caller's"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        member_id = (await backend.get_current_member()).id if mine else None
        contributions = await backend.get_contributions(group_id)
    except Exception as e:
        raise to_http_exception(e, request_id)

    pending = pending_contributions(contributions, member_id=member_id)

    duration_ms = (time.time() - start_time) * 1000
    record_summary("pending", len(contributions))
    log_summary(request_id, group_id, "pending", len(contributions), duration_ms)

    return PendingContributionsResponse(
        group_id=group_id,
        contributions=[pending_contribution_item(c) for c in pending],
    )
