"""Contribution aggregation - per-member totals and shares of the group pool"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from natillera_gateway.domain.models import Contribution, Member, MemberContribution, Status
from natillera_gateway.utils.numbers import ZERO, to_decimal


def aggregate_contributions(
    members: List[Member],
    contributions: List[Contribution],
) -> List[MemberContribution]:
    """
    Sum approved contributions per member and compute each member's share.

    Roster policy:
    - Every roster member appears, in roster order, even with a zero total
    - Contributors missing from the roster are appended after it, in order
      of first appearance, so the per-member totals always add up to the
      approved total

    Percentages are member_total * 100 / group_total and are not
    renormalized; a group total of zero gives every member 0.
    """
    totals: Dict[int, Decimal] = {}
    roster: Dict[int, Member] = {}

    for member in members:
        roster.setdefault(member.id, member)
        totals.setdefault(member.id, ZERO)

    for contribution in contributions:
        if contribution.status != Status.APPROVED:
            continue

        member_id = contribution.member_id
        if member_id not in roster:
            roster[member_id] = contribution.member or Member(id=member_id)
            totals[member_id] = ZERO

        # Signed values are summed as-is
        totals[member_id] += to_decimal(contribution.amount)

    total_general = sum(totals.values(), ZERO)

    return [
        MemberContribution(
            member=member,
            total_contributed=totals[member_id],
            percentage=(totals[member_id] * 100 / total_general) if total_general > 0 else ZERO,
        )
        for member_id, member in roster.items()
    ]


def member_share(member_total: Decimal, group_total: Decimal) -> Decimal:
    """One member's percentage of the pool, rounded to two decimals"""
    member_total = to_decimal(member_total)
    group_total = to_decimal(group_total)
    if group_total <= 0:
        return ZERO
    share = member_total * 100 / group_total
    return share.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def pending_contributions(
    contributions: List[Contribution],
    member_id: Optional[int] = None,
) -> List[Contribution]:
    """Contributions awaiting approval, optionally only those of one member"""
    return [
        c
        for c in contributions
        if c.status == Status.PENDING and (member_id is None or c.member_id == member_id)
    ]
