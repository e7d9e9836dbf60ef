"""Mapping of domain results onto response schemas"""

from decimal import Decimal

from natillera_gateway.api.v1.schemas import (
    LoanItem,
    LoanPaymentItem,
    LoanPortfolioSchema,
    MemberContributionItem,
    MemberSchema,
    PendingContributionItem,
    TransactionItem,
)
from natillera_gateway.config import settings
from natillera_gateway.domain.currency import format_currency
from natillera_gateway.domain.loans import loan_balance
from natillera_gateway.domain.models import (
    Contribution,
    Loan,
    LoanPayment,
    LoanPortfolioSummary,
    Member,
    MemberContribution,
    Transaction,
)
from natillera_gateway.domain.transactions import actor_display_name


def money(amount: Decimal) -> str:
    """Format with the configured currency convention"""
    return format_currency(
        amount,
        max_fraction_digits=settings.currency_max_fraction_digits,
        min_fraction_digits=settings.currency_min_fraction_digits,
        symbol=settings.currency_symbol,
    )


def member_schema(member: Member) -> MemberSchema:
    return MemberSchema(
        id=member.id,
        full_name=member.full_name,
        username=member.username,
        email=member.email,
    )


def member_contribution_item(row: MemberContribution) -> MemberContributionItem:
    return MemberContributionItem(
        member=member_schema(row.member),
        total_contributed=float(row.total_contributed),
        total_contributed_display=money(row.total_contributed),
        percentage=float(row.percentage),
    )


def pending_contribution_item(contribution: Contribution) -> PendingContributionItem:
    return PendingContributionItem(
        id=contribution.id,
        member_id=contribution.member_id,
        member_name=contribution.member.full_name if contribution.member else "",
        amount=float(contribution.amount),
        amount_display=money(contribution.amount),
        month=contribution.month,
        year=contribution.year,
        created_at=contribution.created_at,
    )


def loan_item(loan: Loan) -> LoanItem:
    balance = loan_balance(loan)
    return LoanItem(
        id=loan.id,
        borrower_name=loan.borrower_name,
        status=loan.status.value,
        state=loan.state,
        principal=float(loan.principal),
        annual_rate_pct=float(loan.annual_rate_pct),
        term_months=loan.term_months,
        amount_paid=float(loan.amount_paid),
        interest=float(balance.interest),
        total_payable=float(balance.total_payable),
        outstanding=float(balance.outstanding),
        principal_display=money(loan.principal),
        amount_paid_display=money(loan.amount_paid),
        total_payable_display=money(balance.total_payable),
        outstanding_display=money(balance.outstanding),
        due_date=loan.due_date,
    )


def loan_portfolio_schema(summary: LoanPortfolioSummary) -> LoanPortfolioSchema:
    return LoanPortfolioSchema(
        active_count=summary.active_count,
        amount_lent=float(summary.amount_lent),
        amount_to_recover=float(summary.amount_to_recover),
        amount_recovered=float(summary.amount_recovered),
        amount_lent_display=money(summary.amount_lent),
        amount_to_recover_display=money(summary.amount_to_recover),
        amount_recovered_display=money(summary.amount_recovered),
    )


def loan_payment_item(payment: LoanPayment) -> LoanPaymentItem:
    return LoanPaymentItem(
        id=payment.id,
        amount=float(payment.amount),
        amount_display=money(payment.amount),
        status=payment.status.value,
        payment_date=payment.payment_date,
    )


def transaction_item(transaction: Transaction) -> TransactionItem:
    return TransactionItem(
        id=transaction.id,
        type=str(getattr(transaction.type, "value", transaction.type)),
        category=transaction.category,
        amount=float(transaction.amount),
        amount_display=money(transaction.amount),
        description=transaction.description,
        date=transaction.date,
        actor=actor_display_name(transaction, settings.system_actor_name),
    )
