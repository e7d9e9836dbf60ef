"""Integration tests for API endpoints"""

import pytest
from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from natillera_gateway.domain.models import GroupBalance, LoanPayment, RaffleTicket, Status
from natillera_gateway.domain.exceptions import BackendAPIError, BackendUnauthorizedError, ResourceNotFoundError

CLIENT = "natillera_gateway.infrastructure.clients.backend.NatilleraBackendClient"


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "natillera_summary_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


@patch(f"{CLIENT}.get_contributions")
@patch(f"{CLIENT}.get_group")
def test_contribution_summary(
    mock_group: AsyncMock,
    mock_contributions: AsyncMock,
    client: TestClient,
    members,
    contributions,
):
    """Test GET /v1/groups/{id}/contributions/summary"""
    mock_group.return_value = ({"id": 7, "name": "Natillera"}, members)
    mock_contributions.return_value = contributions

    response = client.get("/v1/groups/7/contributions/summary", headers={"Authorization": "Bearer tok"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 100000
    assert data["total_display"] == "$100.000"
    assert [row["member"]["id"] for row in data["members"]] == [1, 2, 3]
    assert [row["percentage"] for row in data["members"]] == [80.0, 20.0, 0.0]
    assert data["members"][0]["total_contributed_display"] == "$80.000"
    mock_group.assert_awaited_once_with(7)


@patch(f"{CLIENT}.get_contributions")
@patch(f"{CLIENT}.get_group")
@patch(f"{CLIENT}.get_current_member")
def test_my_contribution_share(
    mock_me: AsyncMock,
    mock_group: AsyncMock,
    mock_contributions: AsyncMock,
    client: TestClient,
    members,
    contributions,
):
    """Test GET /v1/groups/{id}/contributions/me"""
    mock_me.return_value = members[1]
    mock_group.return_value = ({"id": 7}, members)
    mock_contributions.return_value = contributions

    response = client.get("/v1/groups/7/contributions/me")

    assert response.status_code == 200
    data = response.json()
    assert data["member_id"] == 2
    assert data["total_contributed"] == 20000
    assert data["group_total"] == 100000
    assert data["percentage"] == 20.0


@patch(f"{CLIENT}.get_contributions")
@patch(f"{CLIENT}.get_current_member")
def test_pending_contributions(
    mock_me: AsyncMock,
    mock_contributions: AsyncMock,
    client: TestClient,
    members,
    contributions,
):
    """Test GET /v1/groups/{id}/contributions/pending"""
    mock_me.return_value = members[0]
    mock_contributions.return_value = contributions

    everyone = client.get("/v1/groups/7/contributions/pending").json()
    mine = client.get("/v1/groups/7/contributions/pending?mine=true").json()

    assert [c["id"] for c in everyone["contributions"]] == [4]
    assert mine["contributions"] == []


@patch(f"{CLIENT}.get_loans")
def test_group_loans(mock_loans: AsyncMock, client: TestClient, sample_loan):
    """Test GET /v1/groups/{id}/loans"""
    halfway = replace(sample_loan, id=11, amount_paid=Decimal("500000"))
    pending = replace(sample_loan, id=12, status=Status.PENDING)
    mock_loans.return_value = [sample_loan, halfway, pending]

    response = client.get("/v1/groups/7/loans?referrer_id=2")

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["active_count"] == 2
    assert data["summary"]["amount_to_recover"] == 1740000
    assert data["loans"][0]["total_payable"] == 1120000
    assert data["loans"][0]["total_payable_display"] == "$1.120.000"
    assert data["loans"][1]["outstanding"] == 620000
    assert data["loans"][2]["status"] == "pendiente"
    mock_loans.assert_awaited_once_with(7, referrer_id=2)


@patch(f"{CLIENT}.get_loan_payments")
def test_loan_balance(mock_payments: AsyncMock, client: TestClient, sample_loan):
    """Test GET /v1/loans/{id}/balance - pending payments never move the balance"""
    loan = replace(sample_loan, amount_paid=Decimal("500000"))
    mock_payments.return_value = (
        loan,
        [
            LoanPayment(1, 10, Decimal("500000"), Status.APPROVED),
            LoanPayment(2, 10, Decimal("100000"), Status.PENDING),
        ],
    )

    response = client.get("/v1/loans/10/balance")

    assert response.status_code == 200
    data = response.json()
    assert data["loan"]["outstanding"] == 620000
    assert data["approved_payments_total"] == 500000
    assert [p["status"] for p in data["payments"]] == ["aprobado", "pendiente"]


@patch(f"{CLIENT}.get_transactions")
def test_transactions_filtered(mock_transactions: AsyncMock, client: TestClient, ledger):
    """Test GET /v1/groups/{id}/transactions with filters"""
    mock_transactions.return_value = ledger

    response = client.get("/v1/groups/7/transactions", params={"type": "gasto"})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert [t["id"] for t in data["transactions"]] == [2, 4]
    assert data["transactions"][0]["actor"] == "Bruno Díaz"
    assert data["transactions"][0]["amount_display"] == "$12.000"
    assert data["actors"] == ["Ana Gómez", "Bruno Díaz", "Sistema"]
    assert data["totals_by_type"]["gasto"] == 12800
    assert data["totals_by_type"]["ingreso"] == 0


@patch(f"{CLIENT}.get_transactions")
def test_transactions_date_and_amount_filters(mock_transactions: AsyncMock, client: TestClient, ledger):
    mock_transactions.return_value = ledger

    response = client.get(
        "/v1/groups/7/transactions",
        params={"date_from": "2024-03-05", "date_to": "2024-03-10", "amount_min": "1000", "actor": "Sistema"},
    )

    assert [t["id"] for t in response.json()["transactions"]] == [3]


@patch(f"{CLIENT}.get_balance")
def test_balance(mock_balance: AsyncMock, client: TestClient):
    """Test GET /v1/groups/{id}/balance"""
    mock_balance.return_value = GroupBalance(
        cash=Decimal("250000"),
        loans_outstanding=Decimal("1120000"),
        income=Decimal("1500000"),
        expenses=Decimal("130000"),
        available_capital=Decimal("250000.5"),
    )

    response = client.get("/v1/groups/7/balance")

    assert response.status_code == 200
    data = response.json()
    assert data["cash"] == 250000
    assert data["display"]["loans_outstanding"] == "$1.120.000"
    assert data["display"]["available_capital"] == "$250.000,5"


@patch(f"{CLIENT}.get_raffle_tickets")
def test_raffle_summary(mock_tickets: AsyncMock, client: TestClient):
    """Test GET /v1/raffles/{id}/tickets/summary"""
    mock_tickets.return_value = [
        RaffleTicket(1, 3, "00", taken=True, paid=True),
        RaffleTicket(2, 3, "01", taken=True, paid=False),
        RaffleTicket(3, 3, "02", taken=False, paid=False),
    ]

    response = client.get("/v1/raffles/3/tickets/summary")

    assert response.status_code == 200
    assert response.json() == {"raffle_id": 3, "total": 3, "available": 1, "taken": 2, "paid": 1, "pending_payment": 1}


@pytest.mark.parametrize(
    "error, status_code",
    [
        (BackendUnauthorizedError("nope"), 401),
        (ResourceNotFoundError("gone"), 404),
        (BackendAPIError("down"), 503),
        (RuntimeError("bug"), 500),
    ],
)
@patch(f"{CLIENT}.get_transactions")
def test_backend_errors_map_to_status(mock_transactions: AsyncMock, error, status_code, client: TestClient):
    mock_transactions.side_effect = error

    response = client.get("/v1/groups/7/transactions")

    assert response.status_code == status_code


@patch(f"{CLIENT}.get_contributions")
@patch(f"{CLIENT}.get_current_member")
def test_pending_contributions_invalid_member_is_unavailable(
    mock_me: AsyncMock,
    mock_contributions: AsyncMock,
    client: TestClient,
    contributions,
):
    """An unusable /users/me payload surfaces as 503, not 500"""
    mock_me.side_effect = BackendAPIError("Invalid member data from backend: empty payload")
    mock_contributions.return_value = contributions

    response = client.get("/v1/groups/7/contributions/pending?mine=true")

    assert response.status_code == 503


@patch("natillera_gateway.api.v1.raffles.log_summary")
@patch(f"{CLIENT}.get_raffle_tickets")
def test_raffle_summary_is_logged(mock_tickets: AsyncMock, mock_log, client: TestClient):
    mock_tickets.return_value = [RaffleTicket(1, 3, "00", taken=True, paid=False)]

    client.get("/v1/raffles/3/tickets/summary")

    mock_log.assert_called_once()
    _, raffle_id, kind, record_count, _ = mock_log.call_args.args
    assert (raffle_id, kind, record_count) == (3, "raffle", 1)
