"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from echeck_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from echeck_gateway.api.v1 import accounts, payouts, transactions, memo, requests
from echeck_gateway.infrastructure.observability.logging import setup_logging
from echeck_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="E-Check Gateway",
        description="Business e-check and ACH payout service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(accounts.router, prefix="/v1", tags=["accounts"])
    app.include_router(payouts.router, prefix="/v1", tags=["payouts"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(memo.router, prefix="/v1", tags=["memo"])
    app.include_router(requests.router, prefix="/v1", tags=["requests"])

    return app


app = create_app()
