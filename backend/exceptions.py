"""Proxy error types and their JSON envelope."""
from fastapi import Request
from fastapi.responses import JSONResponse


class ProxyError(Exception):
    """Base error rendered as ``{"error": message}``."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UpstreamError(ProxyError):
    """Raised when the upstream weather provider call fails."""


class TokenError(ProxyError):
    """Raised when an identity token cannot be issued."""


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Convert any ProxyError into the uniform error envelope."""
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)
