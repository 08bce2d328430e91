"""
FastAPI application for the NarrativeShift service.

This module initializes and configures the FastAPI application that serves
the narrative record, subscription and ledger endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from narrative_shift.api.dependencies import get_host_ledger
from narrative_shift.api.endpoints import ledger, records, subscriptions
from narrative_shift.config.settings import settings
from narrative_shift.core import HostLedger
from narrative_shift.utils.db_health import check_db_connection
from narrative_shift.utils.db_session import get_async_engine
from narrative_shift.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.
    """
    # Startup
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} (program {settings.PROGRAM_ID})")
    logger.info(
        f"Refund policy: {settings.CANCELLATION_REFUND_POLICY.value}, "
        f"airdrop {'enabled' if settings.LEDGER_AIRDROP_ENABLED else 'disabled'}"
    )

    yield

    # Shutdown
    logger.info("Shutting down application")
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""NarrativeShift API for narrative records and paid subscriptions.

        This API provides endpoints for:
        - Storing immutable narrative-shift records
        - Creating and cancelling subscriptions paid in native currency
        - Looking up records, subscriptions and balances by key
        - Health monitoring""",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {"name": "records", "description": "Narrative record operations"},
            {"name": "subscriptions", "description": "Subscription lifecycle"},
            {"name": "ledger", "description": "Native-currency balances"},
            {"name": "health", "description": "Health check and monitoring"},
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(records.router, prefix="/api/v1/records", tags=["records"])
    app.include_router(subscriptions.router, prefix="/api/v1/subscriptions", tags=["subscriptions"])
    app.include_router(ledger.router, prefix="/api/v1/ledger", tags=["ledger"])

    @app.get("/health", tags=["health"], summary="Health Check")
    async def health_check(host_ledger: HostLedger = Depends(get_host_ledger)):
        """
        Health check endpoint reporting service identity and database reachability.
        """
        database_ok = await check_db_connection(host_ledger.session_factory)
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "program_id": settings.PROGRAM_ID,
            "database": "ok" if database_ok else "unreachable",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "narrative_shift.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
