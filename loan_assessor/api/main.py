"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_assessor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_assessor.api.v1 import assessment, batch, dashboard, providers
from loan_assessor.infrastructure.observability.logging import setup_logging
from loan_assessor.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Assessor",
        description="Composite credit/ESG scoring, lending decisions and loan terms",
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
    app.include_router(assessment.router, prefix="/v1", tags=["assessments"])
    app.include_router(batch.router, prefix="/v1", tags=["batches"])
    app.include_router(providers.router, prefix="/v1", tags=["providers"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
