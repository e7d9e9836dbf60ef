"""Ledger filtering and aggregation"""

from decimal import Decimal
from typing import Dict, List, Optional

from natillera_gateway.domain.models import ALL, Transaction, TransactionCriteria, TransactionType
from natillera_gateway.utils.date_utils import end_of_day, start_of_day, wall_clock
from natillera_gateway.utils.numbers import ZERO, to_decimal

SYSTEM_ACTOR = "Sistema"


def actor_display_name(transaction: Transaction, system_name: str = SYSTEM_ACTOR) -> str:
    """Member name, else the creator's name, else the system label"""
    for person in (transaction.member, transaction.creator):
        if person is not None and person.full_name:
            return person.full_name
    return system_name


def _is_bypassed(value: Optional[str]) -> bool:
    return value is None or value == ALL


def _matches(transaction: Transaction, criteria: TransactionCriteria, system_name: str) -> bool:
    if not _is_bypassed(criteria.type) and transaction.type != criteria.type:
        return False

    if criteria.date_from is not None or criteria.date_to is not None:
        if transaction.date is None:
            return False
        moment = wall_clock(transaction.date)
        if criteria.date_from is not None and moment < start_of_day(criteria.date_from):
            return False
        if criteria.date_to is not None and moment > end_of_day(criteria.date_to):
            return False

    amount = to_decimal(transaction.amount)
    if criteria.amount_min is not None and amount < to_decimal(criteria.amount_min):
        return False
    if criteria.amount_max is not None and amount > to_decimal(criteria.amount_max):
        return False

    if not _is_bypassed(criteria.actor) and actor_display_name(transaction, system_name) != criteria.actor:
        return False

    return True


def filter_transactions(
    transactions: List[Transaction],
    criteria: TransactionCriteria,
    system_name: str = SYSTEM_ACTOR,
) -> List[Transaction]:
    """
    Return the transactions matching every active criterion, order preserved.

    Criteria:
    - type: exact match, "all" or None disables it
    - date_from / date_to: inclusive calendar days; date_to covers the whole day
    - amount_min / amount_max: inclusive, amounts parsed defensively (bad -> 0)
    - actor: exact match on the display name, "all" or None disables it
    """
    return [t for t in transactions if _matches(t, criteria, system_name)]


def distinct_actors(transactions: List[Transaction], system_name: str = SYSTEM_ACTOR) -> List[str]:
    """Sorted, deduplicated actor display names for a filter's choice list"""
    return sorted({actor_display_name(t, system_name) for t in transactions})


def totals_by_type(transactions: List[Transaction]) -> Dict[TransactionType, Decimal]:
    """Sum of amounts per transaction type; every known type is present"""
    totals: Dict[TransactionType, Decimal] = {kind: ZERO for kind in TransactionType}
    for txn in transactions:
        try:
            kind = TransactionType(txn.type)
        except ValueError:
            continue  # unknown ledger codes are left out of the breakdown
        totals[kind] += to_decimal(txn.amount)
    return totals
