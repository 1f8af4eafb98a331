"""
Secure HTTP headers middleware.

Adds the same protective headers to every response, including error
responses produced by the normalizer. HSTS is only sent in production,
where the API sits behind TLS.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

CONTENT_SECURITY_POLICY = {
    "default-src": "'self'",
    "style-src": "'self' 'unsafe-inline'",
    "script-src": "'self'",
    "img-src": "'self' data: https:",
}

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
}

HSTS_VALUE = "max-age=15552000; includeSubDomains"


def build_security_headers(production: bool) -> dict[str, str]:
    """Return the header set for the given environment."""
    headers = dict(BASE_HEADERS)
    headers["Content-Security-Policy"] = "; ".join(
        f"{directive} {sources}"
        for directive, sources in CONTENT_SECURITY_POLICY.items()
    )
    if production:
        headers["Strict-Transport-Security"] = HSTS_VALUE
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds secure HTTP headers to every response."""

    def __init__(self, app: ASGIApp, production: bool = False) -> None:
        super().__init__(app)
        self._headers = build_security_headers(production)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(self._headers)
        return response
