"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from ledger_outlook.api.middleware import MetricsMiddleware, RequestIDMiddleware
from ledger_outlook.api.v1 import forecast, payoff
from ledger_outlook.config import settings
from ledger_outlook.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Ledger Outlook",
        description="Debt payoff projection and cash-flow forecasting for a personal-finance ledger",
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

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(payoff.router, prefix="/v1", tags=["debt"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])

    return app


app = create_app()
