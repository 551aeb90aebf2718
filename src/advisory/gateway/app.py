import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from advisory import __version__
from advisory.config import settings
from advisory.gateway.proxy import router as proxy_router

logger = logging.getLogger(__name__)


def create_app(transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the gateway application.

    Args:
        transport: Optional httpx transport for upstream calls (tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("AI Advisory gateway starting up...")
        logger.info(
            "  Upstream timeout: %.0fs", settings.gateway_upstream_timeout_seconds
        )
        async with httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(settings.gateway_upstream_timeout_seconds),
        ) as client:
            app.state.upstream_client = client
            yield
        logger.info("AI Advisory gateway shutting down...")

    app = FastAPI(
        title="AI Advisory Gateway",
        description="CORS forwarding gateway for the analysis backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(proxy_router, prefix="/api", tags=["Proxy"])
    return app
