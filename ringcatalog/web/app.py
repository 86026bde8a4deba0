"""FastAPI application serving the priced ring catalog."""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.base import BaseHTTPMiddleware

from ringcatalog import __version__
from ringcatalog.config import get_config
from ringcatalog.core.logging import configure_logging
from ringcatalog.errors import InvalidFilterValue, OracleUnavailable
from ringcatalog.startup_validation import run_startup_validation
from ringcatalog.web.dependencies import close_oracle
from ringcatalog.web.routes import health, products

# Initialize structured logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_validation()
    yield
    await close_oracle()


app = FastAPI(
    title="RingCatalog API",
    description="Engagement ring catalog priced from the live gold spot price",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            logger.info(
                "request_completed",
                status_code=response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Prometheus Metrics
Instrumentator().instrument(app).expose(app)


# Exception Handlers
@app.exception_handler(OracleUnavailable)
async def oracle_unavailable_handler(request: Request, exc: OracleUnavailable):
    """Gold price lookup failed: one stable public message, no upstream details."""
    logger.warning("gold_price_unavailable", path=request.url.path)
    return JSONResponse(status_code=503, content={"error": str(exc)})


@app.exception_handler(InvalidFilterValue)
async def invalid_filter_handler(request: Request, exc: InvalidFilterValue):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include Routers
app.include_router(products.router)
app.include_router(health.router)
