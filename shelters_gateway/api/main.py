"""FastAPI application factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from shelters_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from shelters_gateway.api.v1 import calculator, leads, listings
from shelters_gateway.infrastructure.observability.logging import setup_logging
from shelters_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, service_name=settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Shelters Realty Gateway",
        description="Loan calculator, lead capture and listing service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Middleware order: last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(calculator.router, prefix="/v1", tags=["calculator"])
    app.include_router(leads.router, prefix="/v1", tags=["leads"])
    app.include_router(listings.router, prefix="/v1", tags=["listings"])

    return app


app = create_app()
