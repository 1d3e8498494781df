"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_wizard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_wizard.api.v1 import application, steps
from loan_wizard.infrastructure.observability.logging import setup_logging
from loan_wizard.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Application Wizard",
        description="Multi-step loan application validation, form state, and submission",
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
    app.include_router(steps.router, prefix="/v1", tags=["steps"])
    app.include_router(application.router, prefix="/v1", tags=["application"])

    return app


app = create_app()
