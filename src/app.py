"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from src.api.routers import api_router
from src.config.settings import Settings, get_settings
from src.infrastructure.logging.logger import setup_logging
from src.infrastructure.storage.blob_client import close_shared_storage
from src.services.verification.verifier import close_shared_verifier

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate required configuration at startup."""
    if not settings.turnstile_secret:
        logger.warning("TURNSTILE_SECRET is not configured, every CV request will fail with 500")

    if not settings.blob_connection_string and not settings.azure_storage_account_url:
        logger.warning(
            "Neither BlobConnectionString nor azure_storage_account_url is set, CV downloads will fail"
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s", settings.app_name)
    _validate_startup_config(settings)
    yield
    logger.info("Shutting down %s", settings.app_name)
    try:
        await close_shared_verifier()
        logger.info("Turnstile HTTP client closed")
    except Exception as e:
        logger.error("Error closing Turnstile client: %s", e, exc_info=True)
    try:
        await close_shared_storage()
        logger.info("Blob storage client closed")
    except Exception as e:
        logger.error("Error closing blob storage client: %s", e, exc_info=True)


app = FastAPI(
    title=settings.app_name,
    description="Serves the CV PDF to callers that pass a Cloudflare Turnstile check",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")
