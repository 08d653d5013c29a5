"""
rate_limit.py — Per-client request rate limiting
================================================
One window applies to every path, keyed on the resolved client address, so
requests behind a trusted proxy are counted per forwarded client rather than
per proxy. slowapi's Limiter owns the counter storage and the window
strategy; the middleware applies it globally, exempts trusted addresses and
reports the window in RateLimit-* headers.
"""
from __future__ import annotations

import logging
import math
import time
from typing import List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import load_settings
from .proxy import get_client_address

log = logging.getLogger("secure_api.rate_limit")

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later"

_NAMESPACE = "global"

limiter = Limiter(key_func=get_client_address)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Count every request against ``limit`` for its client address.

    ``trusted_ips`` skip counting; when left as None the list is re-read
    from SECURE_API_TRUSTED_IPS on each request.
    """

    def __init__(
        self,
        app: ASGIApp,
        limit: str,
        rate_limiter: Limiter = limiter,
        trusted_ips: Optional[List[str]] = None,
    ) -> None:
        super().__init__(app)
        self.item = parse(limit)
        self.rate_limiter = rate_limiter
        self.trusted_ips = trusted_ips

    def _is_trusted(self, key: str) -> bool:
        trusted = self.trusted_ips if self.trusted_ips is not None else load_settings().trusted_ip_list
        return key in trusted

    async def dispatch(self, request: Request, call_next):
        key = get_client_address(request)
        if self._is_trusted(key):
            return await call_next(request)

        backend = self.rate_limiter.limiter
        allowed = backend.hit(self.item, _NAMESPACE, key)
        reset_time, remaining = backend.get_window_stats(self.item, _NAMESPACE, key)
        reset_in = max(0, math.ceil(reset_time - time.time()))
        headers = {
            "RateLimit-Limit": str(self.item.amount),
            "RateLimit-Remaining": str(remaining),
            "RateLimit-Reset": str(reset_in),
        }

        if not allowed:
            log.warning("Rate limit exceeded", extra={"client_ip": key, "limit": str(self.item)})
            headers["Retry-After"] = str(reset_in)
            return JSONResponse(status_code=429, content={"message": RATE_LIMIT_MESSAGE}, headers=headers)

        resp = await call_next(request)
        resp.headers.update(headers)
        return resp
