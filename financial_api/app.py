"""
FastAPI application factory for the Financial API.

This module creates the main FastAPI app with:
- Gateway connection lifecycle management
- Contract handle stored on app state
- /assets routes
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from ledger_gateway import Contract

from .config import Settings
from .connection import get_contract, open_gateway
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage gateway connection lifecycle.

    Startup failures propagate so the server aborts instead of serving
    without a ledger connection.
    """
    if getattr(app.state, "contract", None) is not None:
        yield
        return

    settings: Settings = app.state.settings
    try:
        gateway = await open_gateway(settings)
    except Exception as e:
        logger.critical(f"Failed to connect to gateway: {e}", exc_info=True)
        raise

    app.state.gateway = gateway
    app.state.contract = get_contract(gateway, settings)

    yield

    logger.info("Closing gateway connection")
    await gateway.close()


def create_app(
    settings: Settings | None = None,
    contract: Contract | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration (loaded from environment if not provided)
        contract: Contract to serve; when given, no gateway connection is
            opened at startup
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Financial API",
        description="REST API for reading and creating financial accounts on the ledger",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.contract = contract

    app.include_router(router)

    # Health endpoint at root
    @app.get("/health")
    async def health():
        return {"status": "healthy", "service": "financial-api"}

    return app
