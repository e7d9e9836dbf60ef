"""Domain models - pure Python dataclasses representing natillera entities"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class Status(str, Enum):
    """Approval state shared by contributions, loans and loan payments"""

    PENDING = "pendiente"
    APPROVED = "aprobado"
    REJECTED = "rechazado"


class TransactionType(str, Enum):
    """Ledger entry kinds, valued with the backend's wire codes"""

    CASH = "efectivo"
    LOAN = "prestamo"
    LOAN_PAYMENT = "pago_prestamos"
    PENDING_LOAN_PAYMENT = "pago_prestamo_pendiente"
    INCOME = "ingreso"
    EXPENSE = "gasto"


# Criteria value that disables the type/actor predicates
ALL = "all"


@dataclass
class Member:
    """Natillera member as exposed by the backend"""

    id: int
    full_name: str = ""
    username: str = ""
    email: str = ""


@dataclass
class Contribution:
    """Periodic member contribution ("aporte")"""

    id: int
    member_id: int
    group_id: int
    amount: Decimal
    status: Status
    created_at: Optional[datetime] = None
    month: Optional[int] = None
    year: Optional[int] = None
    member: Optional[Member] = None


@dataclass
class Loan:
    """Internal loan ("préstamo") issued from pooled funds"""

    id: int
    group_id: int
    principal: Decimal
    annual_rate_pct: Decimal
    term_months: int
    amount_paid: Decimal
    status: Status
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    borrower_name: str = ""
    referrer_id: Optional[int] = None
    state: str = ""  # backend lifecycle: activo | pagado | vencido | cancelado
    outstanding: Optional[Decimal] = None  # backend-computed pending amount, when sent


@dataclass
class LoanPayment:
    """Repayment installment against a loan"""

    id: int
    loan_id: int
    amount: Decimal
    status: Status
    payment_date: Optional[datetime] = None


@dataclass
class Transaction:
    """Append-only ledger entry"""

    id: int
    group_id: int
    type: Union[TransactionType, str]
    category: str
    amount: Decimal
    description: str
    date: Optional[datetime]
    actor_id: Optional[int] = None
    member: Optional[Member] = None
    creator: Optional[Member] = None


@dataclass
class GroupBalance:
    """Backend-computed snapshot of a group's financial position"""

    cash: Decimal
    loans_outstanding: Decimal
    income: Decimal
    expenses: Decimal
    available_capital: Decimal


@dataclass
class RaffleTicket:
    """Numbered ticket of a lottery-style raffle"""

    id: int
    raffle_id: int
    number: str
    taken: bool
    paid: bool
    taken_by: Optional[int] = None


@dataclass
class MemberContribution:
    """One member's approved total and share of the group total"""

    member: Member
    total_contributed: Decimal
    percentage: Decimal


@dataclass
class LoanBalance:
    """Simple-interest figures for a single loan"""

    interest: Decimal
    total_payable: Decimal
    outstanding: Decimal


@dataclass
class LoanPortfolioSummary:
    """Aggregate position of a group's approved loans"""

    active_count: int
    amount_lent: Decimal
    amount_to_recover: Decimal
    amount_recovered: Decimal


@dataclass
class TransactionCriteria:
    """Independently optional ledger filters, combined with AND"""

    type: Union[TransactionType, str, None] = ALL
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    amount_min: Optional[Decimal] = None
    amount_max: Optional[Decimal] = None
    actor: Optional[str] = ALL


@dataclass
class RaffleTicketSummary:
    """Ticket counts shown to a raffle's organizer"""

    total: int
    available: int
    taken: int
    paid: int
    pending_payment: int
