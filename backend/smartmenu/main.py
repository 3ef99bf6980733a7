"""FastAPI application entry point."""

import json
import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

import smartmenu.models  # noqa: F401  registers tables on Base.metadata
from smartmenu.api.routes import api_router
from smartmenu.core.config import settings
from smartmenu.core.errors import SmartMenuError, smartmenu_error_handler
from smartmenu.core.rate_limit import limiter
from smartmenu.db.base import Base
from smartmenu.db.session import engine


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shippers."""

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: str, json_output: bool) -> None:
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s [%(name)s] %(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))


configure_logging(settings.log_level, json_output=not settings.debug)
logger = logging.getLogger(__name__)
request_logger = logging.getLogger("requests")

UNLOGGED_PATHS = {"/health", "/api/health", "/docs", "/openapi.json"}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per API request."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            request_logger.exception(f"{request.method} {request.url.path} failed")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        request_logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)",
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting SmartMenu API")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Shutting down SmartMenu API")


app = FastAPI(
    title="SmartMenu API",
    description="QR code menus, customer ordering and restaurant management",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Rate limiting setup
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_exception_handler(SmartMenuError, smartmenu_error_handler)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - added last so it runs first (Starlette LIFO order)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials="*" not in settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    max_age=600,
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
def health_check():
    """Basic liveness check endpoint."""
    return {"status": "UP", "version": app.version}
