"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from natillera_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from natillera_gateway.api.v1 import contributions, loans, transactions, raffles
from natillera_gateway.infrastructure.observability.logging import setup_logging
from natillera_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Natillera Gateway",
        description="Contribution, loan and ledger summaries for savings groups",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(contributions.router, prefix="/v1", tags=["contributions"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(raffles.router, prefix="/v1", tags=["raffles"])

    return app


app = create_app()
