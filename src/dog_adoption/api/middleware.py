"""HTTP middleware: rate limiting and security headers."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from dog_adoption.services.rate_limit import RateLimitDecision, RateLimiter

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def register_middleware(app: FastAPI, rate_limiter: RateLimiter | None) -> None:
    """Attach app-level middleware. The last one registered runs first."""
    if rate_limiter is not None:

        @app.middleware("http")
        async def rate_limit(
            request: Request, call_next: Callable[[Request], Awaitable[Response]]
        ) -> Response:
            decision = rate_limiter.hit(_client_key(request))
            if not decision.allowed:
                logger.warning(
                    "Rate limit exceeded", extra={"client": _client_key(request)}
                )
                response = JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={"message": RATE_LIMITED_MESSAGE},
                )
                response.headers["Retry-After"] = str(decision.reset_after_seconds)
            else:
                response = await call_next(request)
            response.headers.update(_rate_limit_headers(decision))
            return response

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def _client_key(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return request.client.host


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.reset_after_seconds),
    }
