"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Header, Request
from natillera_gateway.infrastructure.clients.backend import NatilleraBackendClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Caller's bearer token, forwarded untouched to the backend"""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer "):].strip() or None
    return None


def get_backend_client(token: str | None = Depends(get_bearer_token)) -> NatilleraBackendClient:
    """Provide a backend client acting on behalf of the caller"""
    return NatilleraBackendClient(token=token)
