"""
FastAPI application entry point.

PAYLENS - Payments analytics chat assistant
"""

import json
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from ..core.config import Settings, get_settings
from ..services.paystack_client import close_paystack_client
from .routes import chat, transactions

API_PREFIX = "/api/v1"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line (production)."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """JSON logs in production, human-readable lines elsewhere."""
    if settings.environment == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
        logging.root.handlers = [handler]
        logging.root.setLevel(logging.INFO)
        return

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


configure_logging(get_settings())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"({settings.environment}, debug={settings.is_debug})"
    )

    if not settings.paystack_jwt.strip():
        logger.warning("PAYSTACK_JWT not set, transaction fetches will fail")
    if not (settings.openai_api_key or settings.openai_base_url):
        logger.warning("OPENAI_API_KEY not set, chat will be unavailable")
    else:
        logger.info(f"Chat model: {settings.chat_default_model}")

    yield

    await close_paystack_client()
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()
    docs_enabled = settings.is_debug

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Chat-based payments analytics assistant",
        lifespan=lifespan,
        docs_url=f"{API_PREFIX}/docs" if docs_enabled else None,
        redoc_url=f"{API_PREFIX}/redoc" if docs_enabled else None,
        openapi_url=f"{API_PREFIX}/openapi.json" if docs_enabled else None,
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if not settings.is_debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Added last so it wraps everything else
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Requested-With"],
    )

    app.include_router(transactions.router, prefix=API_PREFIX)
    app.include_router(chat.router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "paystackConfigured": bool(settings.paystack_jwt.strip()),
        }

    @app.get("/api")
    async def api_info():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_versions": ["v1"],
            "current_version": "v1",
            "docs": f"{API_PREFIX}/docs" if docs_enabled else None,
        }

    return app


app = create_app()
