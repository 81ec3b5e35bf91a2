"""
Cross-origin policy for the storefront API.

Browsers only send cookies cross-site when the response names the exact
origin and allows credentials, so the allowlist is explicit and `*` is
never used.
"""
import re
from typing import Iterable, List, Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from storefront import config

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Requested-With", "Accept"]
EXPOSED_HEADERS = ["Set-Cookie"]


def normalize_origin(origin: str) -> str:
    return origin.strip().rstrip("/")


def build_allowlist(origins: Iterable[str]) -> List[str]:
    allowlist = []
    for origin in origins:
        normalized = normalize_origin(origin)
        if normalized and normalized not in allowlist:
            allowlist.append(normalized)
    return allowlist


def origin_regex(allowlist: List[str]) -> str:
    """Exact allowlisted origins, each with an optional trailing slash."""
    return "(?:" + "|".join(re.escape(origin) for origin in allowlist) + ")/?"


def is_allowed_origin(origin: Optional[str], allowlist: List[str]) -> bool:
    # No Origin header means curl, Postman or a mobile app
    if not origin:
        return True
    return normalize_origin(origin) in allowlist


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Rejects requests from origins outside the allowlist with a JSON 403."""

    def __init__(self, app, allowlist: List[str]):
        super().__init__(app)
        self.allowlist = allowlist

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_allowed_origin(origin, self.allowlist):
            print(f"[ERROR] CORS blocked: {origin}")
            return JSONResponse(
                status_code=403,
                content={
                    "success": False,
                    "message": "CORS: Origin not allowed",
                    "allowedOrigins": self.allowlist,
                },
            )
        return await call_next(request)


def configure_cors(app: FastAPI, origins: Optional[Iterable[str]] = None) -> List[str]:
    allowlist = build_allowlist(config.ALLOWED_ORIGINS if origins is None else origins)
    print(f"[LOG] Allowed CORS origins: {allowlist}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowlist,
        allow_origin_regex=origin_regex(allowlist) if allowlist else None,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
    )
    # Added last so it wraps CORSMiddleware and sees preflights first
    app.add_middleware(OriginGuardMiddleware, allowlist=allowlist)
    return allowlist
