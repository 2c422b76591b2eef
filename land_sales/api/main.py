"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from land_sales.api.middleware import RequestIDMiddleware, MetricsMiddleware
from land_sales.api.v1 import payments, sales, schedule
from land_sales.infrastructure.observability.logging import setup_logging
from land_sales.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Land Sales Financing",
        description="Seller-financed land sales, amortization schedules and payment tracking",
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
    app.include_router(sales.router, prefix="/v1", tags=["sales"])
    app.include_router(schedule.router, prefix="/v1", tags=["schedule"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
