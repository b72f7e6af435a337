"""
API key check and request logging.

Every request is logged as ``"<METHOD> <PATH>"`` on arrival and
``"-> <status> (<elapsed>)"`` once its outcome is known. Requests without the
configured key are answered with 401 before routing.
"""

import logging
import secrets
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from .errors import AuthError
from .responses import error_response


logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def _fixed_point(ns: int, unit: int, suffix: str) -> str:
    whole, frac = divmod(ns, unit)
    digits = len(str(unit)) - 1
    frac_str = str(frac).rjust(digits, "0").rstrip("0")
    if frac_str:
        return f"{whole}.{frac_str}{suffix}"
    return f"{whole}{suffix}"


def format_elapsed(seconds: float) -> str:
    """
    Render a duration compactly: ``850ns``, ``12.5µs``, ``1.234ms``, ``2.5s``,
    ``1m30s``, ``1h0m0s``. Precision is one nanosecond, trailing zeros dropped.
    """
    ns = max(int(round(seconds * _NS_PER_S)), 0)
    if ns == 0:
        return "0s"
    if ns < _NS_PER_US:
        return f"{ns}ns"
    if ns < _NS_PER_MS:
        return _fixed_point(ns, _NS_PER_US, "µs")
    if ns < _NS_PER_S:
        return _fixed_point(ns, _NS_PER_MS, "ms")
    if ns < _NS_PER_MIN:
        return _fixed_point(ns, _NS_PER_S, "s")
    
    hours, rem = divmod(ns, _NS_PER_HOUR)
    minutes, rem = divmod(rem, _NS_PER_MIN)
    out = f"{minutes}m{_fixed_point(rem, _NS_PER_S, 's')}"
    if hours:
        out = f"{hours}h{out}"
    return out


class RequestTrace:
    """Per-request timing and log lines."""

    def __init__(self, method: str, path: str):
        self.method = method
        self.path = path
        self.started = time.perf_counter()

    @property
    def request_line(self) -> str:
        return f"{self.method} {self.path}"

    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def finish(self, status: int) -> str:
        """Outcome log line for the final status."""
        return f"-> {status} ({format_elapsed(self.elapsed())})"


class AuthLoggingMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose X-API-Key does not match ``api_key`` and logs
    every request with its final status and latency.
    
    The status is taken from the response returned by the downstream app,
    so handlers never need to report it themselves.
    """

    def __init__(self, app: ASGIApp, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    def is_authorized(self, provided: str) -> bool:
        return secrets.compare_digest(provided.encode("utf-8"), self.api_key.encode("utf-8"))

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace = RequestTrace(request.method, request.url.path)
        logger.info(trace.request_line)
        
        if not self.is_authorized(request.headers.get(API_KEY_HEADER, "")):
            response = error_response(AuthError.status_code, AuthError.message)
            logger.info(trace.finish(response.status_code))
            return response
        
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(trace.finish(500))
            raise
        
        logger.info(trace.finish(response.status_code))
        return response
