"""FastAPI application entry point.

Configures CORS, structured logging, lifespan events (including APScheduler),
exception handlers and router registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from postgrest.exceptions import APIError
from starlette.responses import JSONResponse

from gigmarket.core.config import settings
from gigmarket.core.exceptions import MarketplaceError, WorkflowInconsistentError
from gigmarket.core.logging import setup_logging
from gigmarket.routers import (
    applications,
    auth,
    dashboard,
    escrow,
    gigs,
    health,
    mining,
    profiles,
    wallet,
)
from gigmarket.scheduler.jobs import shutdown_scheduler, start_scheduler
from gigmarket.services.wallet import WalletRPCError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    setup_logging()
    logger.info("Application starting up")
    start_scheduler()
    yield
    shutdown_scheduler()
    logger.info("Application shutting down")


app = FastAPI(
    title="Gig Marketplace API",
    description="Post gigs, apply, review applications, escrow and simulated mining rewards",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception Handlers
# ---------------------------------------------------------------------------
@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    content: dict[str, object] = {"detail": exc.message}
    if isinstance(exc, WorkflowInconsistentError):
        content["applied_steps"] = exc.applied_steps
        logger.error(
            "workflow_inconsistent",
            extra={"path": request.url.path, "applied_steps": exc.applied_steps},
        )
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(APIError)
async def backend_error_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.error(
        "backend_request_failed",
        extra={
            "path": request.url.path,
            "error_code": exc.code,
            "error_message": exc.message,
        },
    )
    return JSONResponse(status_code=502, content={"detail": "Backend request failed"})


@app.exception_handler(WalletRPCError)
@app.exception_handler(httpx.HTTPError)
async def wallet_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "wallet_request_failed",
        extra={"path": request.url.path, "error_message": str(exc)},
    )
    return JSONResponse(status_code=502, content={"detail": "Wallet provider request failed"})


# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(profiles.router, prefix="/api/v1/profiles", tags=["Profiles"])
app.include_router(wallet.router, prefix="/api/v1/wallet", tags=["Wallet"])
app.include_router(gigs.router, prefix="/api/v1/gigs", tags=["Gigs"])
app.include_router(applications.router, prefix="/api/v1/gigs", tags=["Applications"])
app.include_router(escrow.router, prefix="/api/v1/escrow", tags=["Escrow"])
app.include_router(mining.router, prefix="/api/v1/mining", tags=["Mining"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
