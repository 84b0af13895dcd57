"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_approver.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_approver.api.v1 import assessments
from credit_approver.domain.exceptions import InvalidTransition, SessionNotFound
from credit_approver.infrastructure.observability.logging import setup_logging
from credit_approver.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Approver",
        description="Eligibility questionnaire, credit line offer and summary delivery",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(InvalidTransition)
    def invalid_transition_handler(request: Request, exc: InvalidTransition):
        return JSONResponse(status_code=409, content={"detail": str(exc), "phase": exc.phase})

    @app.exception_handler(SessionNotFound)
    def session_not_found_handler(request: Request, exc: SessionNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(assessments.router, prefix="/v1", tags=["assessments"])

    return app


app = create_app()
