"""
HTTP middleware — request context logging and Solana Actions CORS.

- RequestContextMiddleware: request_id (from X-Request-ID or generated), bound to
  structlog contextvars for the request; timing; X-Request-ID on every response.
- setup_middlewares(app): install CORS (Actions header set) and request context.
"""

from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.cors import CORSMiddleware

from solana_donate.donate_logging import bind_request, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Headers wallets and blink clients send to action endpoints
ACTIONS_CORS_METHODS = ["GET", "POST", "PUT", "OPTIONS"]
ACTIONS_CORS_HEADERS = ["Content-Type", "Authorization", "Content-Encoding", "Accept-Encoding"]


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip()[:64] or uuid.uuid4().hex
        bind_request(request_id, method=request.method, path=request.url.path)
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response


def setup_middlewares(app: FastAPI) -> None:
    # Added last = outermost: CORS preflights are answered before request logging
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=ACTIONS_CORS_METHODS,
        allow_headers=ACTIONS_CORS_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
    )
