"""Origin allow-listing for browser clients."""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class OriginRejected(Exception):
    """Raised when a request declares an origin outside the allow-list."""

    def __init__(self, origin: str) -> None:
        super().__init__(f"Origin {origin!r} not allowed by CORS")
        self.origin = origin


def is_origin_allowed(origin: str | None, allowed: Iterable[str]) -> bool:
    """Requests without an Origin header come from the same origin or a non-browser client."""

    if not origin:
        return True
    return origin in set(allowed)


def check_origin(origin: str | None, allowed: Iterable[str]) -> None:
    if not is_origin_allowed(origin, allowed):
        raise OriginRejected(origin or "")


def install_origin_policy(app: FastAPI, allowed: Iterable[str]) -> None:
    """Grant CORS headers to listed origins and refuse every other origin."""

    allowed_origins = list(allowed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registered after CORSMiddleware so it wraps it and runs first.
    @app.middleware("http")
    async def enforce_origin(request: Request, call_next):
        try:
            check_origin(request.headers.get("origin"), allowed_origins)
        except OriginRejected as exc:
            logger.warning("Rejected request %s %s: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=403, content={"message": "Not allowed by CORS"})
        return await call_next(request)
