"""
FastAPI server — Solana Actions donate endpoint.

create_app() mounts the donate router under DONATE_MOUNT_PATH, plus:
  GET /actions.json  (Actions rules: website /donate/** -> API path)
  GET /health        (liveness)
Errors are rendered as {"message", "error_code"} JSON. Config via env (see config.settings).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from solana_donate import __version__
from solana_donate.actions.models import (
    ActionError,
    ActionGetResponse,
    ActionPostResponse,
    ActionRule,
    ActionsJsonResponse,
)
from solana_donate.api_server.donate import get_donate_listing, post_donate_default
from solana_donate.api_server.donate import router as donate_router
from solana_donate.api_server.middleware import setup_middlewares
from solana_donate.config.env import masked_rpc_url
from solana_donate.config.settings import DonateSettings, get_settings
from solana_donate.core.exceptions import AssemblyFailed, DonateError
from solana_donate.donate_logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, message: str, error_code: str | None = None) -> JSONResponse:
    body = ActionError(message=message, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def donate_error_handler(request: Request, exc: DonateError) -> JSONResponse:
    """DonateError -> status_code + {"message", "error_code"}."""
    if isinstance(exc, AssemblyFailed):
        logger.error("donate_assembly_failed", error=exc.message)
    else:
        logger.warning("donate_request_rejected", error_code=exc.error_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return _error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{where}: {first.get('msg', 'invalid request')}" if where else "Invalid request body"
    logger.warning("donate_request_invalid", error=message)
    return _error_response(422, message, "invalid_request")


def create_app(settings: DonateSettings | None = None) -> FastAPI:
    """Build the ASGI app. settings defaults to get_settings() (env / .env)."""
    settings = settings or get_settings()
    mount_path = settings.mount_path.rstrip("/")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "donate_api_started",
            mount_path=mount_path or "/",
            rpc=masked_rpc_url(settings.solana_rpc_url),
            destination=settings.destination_wallet,
            dummy_blockhash=settings.use_dummy_blockhash,
        )
        yield
        logger.info("donate_api_stopped")

    app = FastAPI(
        title="Solana Donate Action",
        description="Solana Actions endpoint returning unsigned SOL donation transactions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    setup_middlewares(app)
    app.add_exception_handler(DonateError, donate_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/actions.json", response_model=ActionsJsonResponse, tags=["Actions"])
    def actions_json() -> ActionsJsonResponse:
        """Map website /donate/** to the donate API."""
        return ActionsJsonResponse(
            rules=[ActionRule(pathPattern="/donate/**", apiPath=f"{mount_path}/**")],
        )

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Liveness check: API is up."""
        return {"status": "ok", "version": __version__}

    # After the fixed routes: with a root mount, /{amount} would shadow them
    app.include_router(donate_router, prefix=mount_path)
    if mount_path:
        # Wallets POST to the bare mount; without these Starlette answers 307 to the slashed path
        app.add_api_route(
            mount_path,
            get_donate_listing,
            methods=["GET"],
            response_model=ActionGetResponse,
            response_model_exclude_none=True,
            include_in_schema=False,
        )
        app.add_api_route(
            mount_path,
            post_donate_default,
            methods=["POST"],
            response_model=ActionPostResponse,
            response_model_exclude_none=True,
            include_in_schema=False,
        )

    return app
