import logging
from typing import Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def is_origin_allowed(origin: Optional[str], allowed_origins: Iterable[str]) -> bool:
    """Exact allow-list match; a single trailing slash on origin is tolerated.

    Requests without an Origin header (same-origin, curl, server to server)
    are always allowed.
    """
    if not origin:
        return True
    return any(origin == allowed or origin == allowed + "/" for allowed in allowed_origins)


async def origin_gate(request: Request, call_next):
    """Reject disallowed browser origins before any route runs."""

    origin = request.headers.get("origin")
    if not is_origin_allowed(origin, request.app.state.settings.allowed_origins):
        logger.warning("Rejected request from origin %s to %s", origin, request.url.path)
        return JSONResponse({"detail": "Not allowed by CORS"}, status_code=403)
    return await call_next(request)


async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
