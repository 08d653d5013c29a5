from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import routes_test
from .config import settings
from .middleware import BodySizeLimitMiddleware, SecurityHeadersMiddleware
from .rate_limit import RateLimitMiddleware, limiter
from .telemetry.logger import configure_logging

configure_logging(settings)
log = logging.getLogger("secure_api")

app = FastAPI(
    title="Secure API",
    version="0.1.0",
    description=(
        "Hardened demo API: security headers, CORS, rate limiting, "
        "proxy-aware client addresses and input validation around a single test endpoint."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter

# Last added runs first: security headers wrap everything, then the rate limit,
# so preflights and unknown paths are counted too.
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Range", "X-Content-Range"],
    max_age=600,
)
app.add_middleware(RateLimitMiddleware, limit=settings.rate_limit)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(routes_test.router)


# ---------------------------------------------------------------------------
# Error rendering — every error body is {"error": ...}
# ---------------------------------------------------------------------------

_STATUS_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _STATUS_MESSAGES.get(exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


# Last resort for failures raised outside SecurityHeadersMiddleware.
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health", tags=["meta"])
def health() -> dict:
    return {"status": "healthy"}
