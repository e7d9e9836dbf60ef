"""Raffle ticket bookkeeping"""

from typing import List

from natillera_gateway.domain.models import RaffleTicket, RaffleTicketSummary


def summarize_tickets(tickets: List[RaffleTicket]) -> RaffleTicketSummary:
    """Count available, taken, paid and taken-but-unpaid tickets"""
    taken = [t for t in tickets if t.taken]
    paid = sum(1 for t in taken if t.paid)

    return RaffleTicketSummary(
        total=len(tickets),
        available=len(tickets) - len(taken),
        taken=len(taken),
        paid=paid,
        pending_payment=len(taken) - paid,
    )
