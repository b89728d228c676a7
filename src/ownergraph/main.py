"""
Ownergraph - NYC ownership graph service

FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from ownergraph import __version__
from ownergraph.api.routes import portfolio_router
from ownergraph.config import settings
from ownergraph.ingestion.hpd import HPDAdapter
from ownergraph.ingestion.pluto import PlutoAdapter
from ownergraph.ingestion.socrata import SocrataClient
from ownergraph.portfolio.service import PortfolioService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.api_rate_limit])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Ownergraph...")

    # One SODA client (and one outbound rate limit) for both datasets
    app.state.socrata = SocrataClient()
    app.state.portfolio_service = PortfolioService(
        registry=HPDAdapter(app.state.socrata),
        enrichment=PlutoAdapter(app.state.socrata),
    )

    logger.info("Ownergraph started successfully")

    yield

    # Cleanup
    logger.info("Shutting down Ownergraph...")
    await app.state.socrata.close()
    logger.info("Ownergraph shutdown complete")


app = FastAPI(
    title="Ownergraph",
    description="Ownership networks behind NYC residential properties, from public HPD filings",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "message": "Too many requests. Please try again later.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions without leaking internals in production."""
    logger.exception(f"Unhandled exception: {exc}")

    if settings.is_production:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred.",
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc),
            "type": type(exc).__name__,
        },
    )


@app.get("/health")
@limiter.exempt
async def health_check() -> dict[str, Any]:
    """Liveness check."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


app.include_router(portfolio_router, prefix="/api/v1/portfolio", tags=["portfolio"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ownergraph.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
