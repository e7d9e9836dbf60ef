"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from natillera_gateway.api.main import create_app
from natillera_gateway.domain.models import Contribution, Loan, Member, Status, Transaction, TransactionType


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def members() -> list[Member]:
    """Roster of a three-member natillera"""
    return [
        Member(id=1, full_name="Ana Gómez", username="ana", email="ana@example.com"),
        Member(id=2, full_name="Bruno Díaz", username="bruno", email="bruno@example.com"),
        Member(id=3, full_name="Carla Ruiz", username="carla", email="carla@example.com"),
    ]


@pytest.fixture
def contributions() -> list[Contribution]:
    """Ana 50k + 30k, Bruno 20k approved; one pending and one rejected for Carla"""
    return [
        Contribution(id=1, member_id=1, group_id=7, amount=Decimal("50000"), status=Status.APPROVED, month=1, year=2024),
        Contribution(id=2, member_id=1, group_id=7, amount=Decimal("30000"), status=Status.APPROVED, month=2, year=2024),
        Contribution(id=3, member_id=2, group_id=7, amount=Decimal("20000"), status=Status.APPROVED, month=1, year=2024),
        Contribution(id=4, member_id=3, group_id=7, amount=Decimal("40000"), status=Status.PENDING, month=2, year=2024),
        Contribution(id=5, member_id=3, group_id=7, amount=Decimal("10000"), status=Status.REJECTED, month=1, year=2024),
    ]


@pytest.fixture
def sample_loan() -> Loan:
    """1,000,000 at 12% yearly over 12 months, nothing paid yet"""
    return Loan(
        id=10,
        group_id=7,
        principal=Decimal("1000000"),
        annual_rate_pct=Decimal("12"),
        term_months=12,
        amount_paid=Decimal("0"),
        status=Status.APPROVED,
        borrower_name="Bruno Díaz",
        state="activo",
    )


@pytest.fixture
def ledger(members: list[Member]) -> list[Transaction]:
    """Three income entries and two expenses across March 2024"""
    ana, bruno, _ = members
    return [
        Transaction(1, 7, TransactionType.INCOME, "aportes", Decimal("50000"), "Aporte enero", datetime(2024, 3, 1, 9, 0), 1, member=ana),
        Transaction(2, 7, TransactionType.EXPENSE, "papeleria", Decimal("12000"), "Cuadernos", datetime(2024, 3, 5, 15, 30), 2, creator=bruno),
        Transaction(3, 7, TransactionType.INCOME, "rifa", Decimal("1500"), "Venta de boletas", datetime(2024, 3, 10, 23, 59, 30), None),
        Transaction(4, 7, TransactionType.EXPENSE, "bancos", Decimal("800"), "Cuota de manejo", datetime(2024, 3, 15, 8, 0), 2, creator=bruno),
        Transaction(5, 7, TransactionType.INCOME, "aportes", Decimal("20000"), "Aporte febrero", datetime(2024, 3, 20, 10, 0), 2, member=bruno),
    ]
