"""Pydantic schemas for API responses"""

from pydantic import BaseModel
from datetime import date, datetime
from typing import Dict, List, Optional


class MemberSchema(BaseModel):
    """Member identity"""

    id: int
    full_name: str
    username: str = ""
    email: str = ""


class MemberContributionItem(BaseModel):
    """One row of the contribution summary"""

    member: MemberSchema
    total_contributed: float
    total_contributed_display: str
    percentage: float


class ContributionSummaryResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/contributions/summary"""

    group_id: int
    total: float
    total_display: str
    members: List[MemberContributionItem]


class MemberShareResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/contributions/me"""

    group_id: int
    member_id: int
    total_contributed: float
    total_contributed_display: str
    group_total: float
    group_total_display: str
    percentage: float


class PendingContributionItem(BaseModel):
    """Contribution awaiting approval"""

    id: int
    member_id: int
    member_name: str
    amount: float
    amount_display: str
    month: Optional[int] = None
    year: Optional[int] = None
    created_at: Optional[datetime] = None


class PendingContributionsResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/contributions/pending"""

    group_id: int
    contributions: List[PendingContributionItem]


class LoanItem(BaseModel):
    """Loan with its computed balance"""

    id: int
    borrower_name: str
    status: str
    state: str
    principal: float
    annual_rate_pct: float
    term_months: int
    amount_paid: float
    interest: float
    total_payable: float
    outstanding: float
    principal_display: str
    amount_paid_display: str
    total_payable_display: str
    outstanding_display: str
    due_date: Optional[date] = None


class LoanPortfolioSchema(BaseModel):
    """Totals over a group's approved loans"""

    active_count: int
    amount_lent: float
    amount_to_recover: float
    amount_recovered: float
    amount_lent_display: str
    amount_to_recover_display: str
    amount_recovered_display: str


class LoansResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/loans"""

    group_id: int
    summary: LoanPortfolioSchema
    loans: List[LoanItem]


class LoanPaymentItem(BaseModel):
    """Single repayment"""

    id: int
    amount: float
    amount_display: str
    status: str
    payment_date: Optional[datetime] = None


class LoanBalanceResponse(BaseModel):
    """Response for GET /v1/loans/{loan_id}/balance"""

    loan: LoanItem
    payments: List[LoanPaymentItem]
    approved_payments_total: float
    approved_payments_total_display: str


class TransactionItem(BaseModel):
    """Ledger entry with its resolved actor"""

    id: int
    type: str
    category: str
    amount: float
    amount_display: str
    description: str
    date: Optional[datetime] = None
    actor: str


class TransactionsResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/transactions"""

    group_id: int
    count: int
    transactions: List[TransactionItem]
    actors: List[str]
    totals_by_type: Dict[str, float]


class BalanceResponse(BaseModel):
    """Response for GET /v1/groups/{group_id}/balance"""

    group_id: int
    cash: float
    loans_outstanding: float
    income: float
    expenses: float
    available_capital: float
    display: Dict[str, str]


class RaffleSummaryResponse(BaseModel):
    """Response for GET /v1/raffles/{raffle_id}/tickets/summary"""

    raffle_id: int
    total: int
    available: int
    taken: int
    paid: int
    pending_payment: int
