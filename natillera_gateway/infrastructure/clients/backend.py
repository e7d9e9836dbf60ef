"""Natillera backend HTTP client for fetching group records"""

import httpx
from typing import Any, Dict, List, Optional, Tuple
from natillera_gateway.domain.models import (
    Contribution,
    GroupBalance,
    Loan,
    LoanPayment,
    Member,
    RaffleTicket,
    Status,
    Transaction,
    TransactionType,
)
from natillera_gateway.domain.exceptions import BackendAPIError, BackendUnauthorizedError, ResourceNotFoundError
from natillera_gateway.utils.date_utils import parse_date, parse_timestamp
from natillera_gateway.utils.numbers import to_decimal, to_int
from natillera_gateway.config import settings

# Loan listings come back grouped by approval state
LOAN_GROUPS = {
    "aprobados": Status.APPROVED,
    "pendientes": Status.PENDING,
    "rechazados": Status.REJECTED,
}


def _status(raw: Any, default: Status = Status.PENDING) -> Status:
    """Normalize a backend status label; unknown labels never count as approved"""
    if not raw:
        return default
    try:
        return Status(str(raw).strip().lower())
    except ValueError:
        return default


def parse_member(data: Optional[Dict[str, Any]]) -> Optional[Member]:
    if not data:
        return None
    return Member(
        id=data["id"],
        full_name=data.get("full_name") or "",
        username=data.get("username") or "",
        email=data.get("email") or "",
    )


def parse_contribution(data: Dict[str, Any]) -> Contribution:
    return Contribution(
        id=data["id"],
        member_id=data["user_id"],
        group_id=data.get("natillera_id"),
        amount=to_decimal(data.get("amount")),
        status=_status(data.get("status")),
        created_at=parse_timestamp(data.get("created_at")),
        month=data.get("month"),
        year=data.get("year"),
        member=parse_member(data.get("user")),
    )


def parse_loan(data: Dict[str, Any], status: Status) -> Loan:
    pending = data.get("monto_pendiente")
    return Loan(
        id=data["id"],
        group_id=data.get("natillera_id"),
        principal=to_decimal(data.get("monto")),
        annual_rate_pct=to_decimal(data.get("tasa_interes")),
        term_months=to_int(data.get("plazo_meses")),
        amount_paid=to_decimal(data.get("monto_pagado")),
        status=status,
        start_date=parse_date(data.get("fecha_inicio")),
        due_date=parse_date(data.get("fecha_vencimiento")),
        borrower_name=data.get("nombre_prestatario") or "",
        referrer_id=data.get("referente_id"),
        state=data.get("estado") or "",
        outstanding=to_decimal(pending) if pending is not None else None,
    )


def parse_loan_payment(data: Dict[str, Any], loan_id: int) -> LoanPayment:
    return LoanPayment(
        id=data["id"],
        loan_id=data.get("prestamo_id", loan_id),
        amount=to_decimal(data.get("monto")),
        status=_status(data.get("estado")),
        payment_date=parse_timestamp(data.get("fecha_pago") or data.get("created_at")),
    )


def parse_transaction(data: Dict[str, Any]) -> Transaction:
    raw_type = data["tipo"]
    try:
        kind = TransactionType(raw_type)
    except ValueError:
        kind = raw_type  # unknown ledger codes pass through untouched
    return Transaction(
        id=data["id"],
        group_id=data.get("natillera_id"),
        type=kind,
        category=data.get("categoria") or "",
        amount=to_decimal(data.get("monto")),
        description=data.get("descripcion") or "",
        date=parse_timestamp(data.get("fecha") or data.get("created_at")),
        actor_id=data.get("creado_por"),
        member=parse_member(data.get("miembro")),
        creator=parse_member(data.get("creador")),
    )


def parse_balance(data: Dict[str, Any]) -> GroupBalance:
    return GroupBalance(
        cash=to_decimal(data.get("efectivo")),
        loans_outstanding=to_decimal(data.get("prestamos")),
        income=to_decimal(data.get("ingresos")),
        expenses=to_decimal(data.get("gastos")),
        available_capital=to_decimal(data.get("capital_disponible")),
    )


def parse_ticket(data: Dict[str, Any]) -> RaffleTicket:
    return RaffleTicket(
        id=data["id"],
        raffle_id=data["sorteo_id"],
        number=str(data["numero"]),
        taken=data.get("estado") == "tomado",
        paid=bool(data.get("pagado")),
        taken_by=data.get("tomado_por"),
    )


class NatilleraBackendClient:
    """Client for the natillera REST backend"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.backend_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.token = token
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        """
        GET a backend resource and decode its JSON body.

        Raises:
            BackendUnauthorizedError: On HTTP 401
            ResourceNotFoundError: On HTTP 404
            BackendAPIError: On timeout, other HTTP errors, or a non-JSON body
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}{path}",
                    params=params,
                    headers=self._headers(),
                )
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise BackendAPIError(f"Backend timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                if status_code == 401:
                    raise BackendUnauthorizedError("Backend rejected credentials") from e
                if status_code == 404:
                    raise ResourceNotFoundError(f"Backend resource not found: {path}") from e
                raise BackendAPIError(f"Backend error: {status_code}") from e
            except httpx.RequestError as e:
                raise BackendAPIError(f"Backend unreachable: {e}") from e
            except ValueError as e:
                raise BackendAPIError(f"Invalid JSON from backend: {e}") from e

    async def get_current_member(self) -> Member:
        """Member behind the forwarded token"""
        data = await self._get("/users/me")
        try:
            member = parse_member(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid member data from backend: {e}") from e
        if member is None:
            raise BackendAPIError("Invalid member data from backend: empty payload")
        return member

    async def get_group(self, group_id: int) -> Tuple[Dict[str, Any], List[Member]]:
        """Group record and its member roster"""
        data = await self._get(f"/natilleras/{group_id}")
        try:
            members = [parse_member(m) for m in data.get("members") or []]
            return data, members
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid group data from backend: {e}") from e

    async def get_contributions(self, group_id: int) -> List[Contribution]:
        """All contributions of a group, every status"""
        data = await self._get(f"/aportes/natillera/{group_id}")
        try:
            return [parse_contribution(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid contribution data from backend: {e}") from e

    async def get_loans(self, group_id: int, referrer_id: int | None = None) -> List[Loan]:
        """
        Loans of a group, optionally only those referred by one member.

        The backend groups loans by approval state; the group a loan comes
        in sets its status.
        """
        params: Dict[str, Any] = {"estado": "activo"}
        if referrer_id is not None:
            params["referente_id"] = referrer_id

        data = await self._get(f"/prestamos/natilleras/{group_id}", params=params)
        try:
            return [
                parse_loan(item, status)
                for key, status in LOAN_GROUPS.items()
                for item in data.get(key) or []
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid loan data from backend: {e}") from e

    async def get_loan_payments(self, loan_id: int) -> Tuple[Loan, List[LoanPayment]]:
        """Loan detail with its payments"""
        data = await self._get(f"/prestamos/{loan_id}/pagos")
        try:
            detail = data["prestamo"]
            loan = parse_loan(detail, _status(detail.get("status"), Status.APPROVED))
            payments = [parse_loan_payment(item, loan_id) for item in data.get("pagos") or []]
            return loan, payments
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid loan payment data from backend: {e}") from e

    async def get_transactions(self, group_id: int) -> List[Transaction]:
        """Full ledger of a group"""
        data = await self._get(f"/transacciones/natilleras/{group_id}/transacciones")
        try:
            return [parse_transaction(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid transaction data from backend: {e}") from e

    async def get_balance(self, group_id: int) -> GroupBalance:
        """Backend-computed balance snapshot"""
        data = await self._get(f"/transacciones/natilleras/{group_id}/balance")
        try:
            return parse_balance(data)
        except (TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid balance data from backend: {e}") from e

    async def get_raffle_tickets(self, raffle_id: int) -> List[RaffleTicket]:
        """Every ticket of a raffle"""
        data = await self._get(f"/sorteos/{raffle_id}/billetes")
        try:
            return [parse_ticket(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendAPIError(f"Invalid raffle ticket data from backend: {e}") from e
