"""Loan balances - simple interest prorated by term"""

from decimal import Decimal
from typing import Any, List

from natillera_gateway.domain.models import Loan, LoanBalance, LoanPayment, LoanPortfolioSummary, Status
from natillera_gateway.utils.numbers import ZERO, to_decimal


def compute_balance(
    principal: Any,
    annual_rate_pct: Any,
    term_months: Any,
    amount_paid: Any,
) -> LoanBalance:
    """
    Compute total payable and outstanding balance for a loan.

    Formula (simple interest, not amortized, not compounded):
        interest      = principal * (annual_rate_pct / 100) * (term_months / 12)
        total_payable = principal + interest
        outstanding   = max(0, total_payable - amount_paid)

    Degenerate loans (non-positive principal, rate or term) always have
    zero outstanding.

    Example:
        1,000,000 at 12% for 12 months, 500,000 paid
        interest = 120,000, total = 1,120,000, outstanding = 620,000
    """
    principal = to_decimal(principal)
    rate = to_decimal(annual_rate_pct)
    term = to_decimal(term_months)
    paid = to_decimal(amount_paid)

    interest = principal * (rate / 100) * (term / 12)
    total_payable = principal + interest

    if principal <= 0 or rate <= 0 or term <= 0:
        return LoanBalance(interest=interest, total_payable=total_payable, outstanding=ZERO)

    outstanding = max(ZERO, total_payable - paid)
    return LoanBalance(interest=interest, total_payable=total_payable, outstanding=outstanding)


def loan_balance(loan: Loan) -> LoanBalance:
    """
    Balance for a loan record.

    A pending amount computed by the backend wins over the local figure;
    the local computation only fills in when the backend did not send one.
    """
    balance = compute_balance(loan.principal, loan.annual_rate_pct, loan.term_months, loan.amount_paid)
    if loan.outstanding is not None:
        balance.outstanding = max(ZERO, to_decimal(loan.outstanding))
    return balance


def summarize_loans(loans: List[Loan]) -> LoanPortfolioSummary:
    """Portfolio totals over approved loans only"""
    active_count = 0
    amount_lent = ZERO
    amount_to_recover = ZERO
    amount_recovered = ZERO

    for loan in loans:
        if loan.status != Status.APPROVED:
            continue

        outstanding = loan_balance(loan).outstanding
        if outstanding > 0:
            active_count += 1

        amount_lent += to_decimal(loan.principal)
        amount_to_recover += outstanding
        amount_recovered += to_decimal(loan.amount_paid)

    return LoanPortfolioSummary(
        active_count=active_count,
        amount_lent=amount_lent,
        amount_to_recover=amount_to_recover,
        amount_recovered=amount_recovered,
    )


def approved_payments_total(payments: List[LoanPayment]) -> Decimal:
    """Sum of approved payments; pending ones never move the balance"""
    return sum((to_decimal(p.amount) for p in payments if p.status == Status.APPROVED), ZERO)
