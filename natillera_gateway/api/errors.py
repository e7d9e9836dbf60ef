"""Translation of backend failures into HTTP errors"""

import logging
from fastapi import HTTPException

from natillera_gateway.domain.exceptions import BackendAPIError, BackendUnauthorizedError, ResourceNotFoundError
from natillera_gateway.infrastructure.observability.metrics import backend_fetch_failures_counter


def to_http_exception(error: Exception, request_id: str) -> HTTPException:
    """Log the failure and map it to the status code the caller should see"""
    if isinstance(error, BackendUnauthorizedError):
        backend_fetch_failures_counter.labels(reason="unauthorized").inc()
        logging.warning(f"Backend rejected credentials: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=401, detail="Not authorized")

    if isinstance(error, ResourceNotFoundError):
        backend_fetch_failures_counter.labels(reason="not_found").inc()
        logging.warning(f"Resource not found: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=404, detail="Resource not found")

    if isinstance(error, BackendAPIError):
        backend_fetch_failures_counter.labels(reason="unavailable").inc()
        logging.error(f"Backend API error: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=503, detail="Natillera backend unavailable")

    logging.error(f"Unexpected error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")
