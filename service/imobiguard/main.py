"""FastAPI application factory for the validation service.

Settings are loaded once and stored on app.state so routers and the
threat-scan dependency can read them without globals. The two request
pipeline hooks are wired here: body sanitization as ASGI middleware and
suspicious-input logging as an app-wide dependency.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from imobiguard import __version__
from imobiguard.config import Settings
from imobiguard.middleware import SanitizeBodyMiddleware, detect_malicious_input
from imobiguard.routers import health, redirects, uploads

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info(
        "imobiguard ready (body_sanitization=%s, threat_logging=%s, max_upload=%d bytes)",
        settings.sanitize_request_bodies,
        settings.threat_logging_enabled,
        settings.max_upload_size_bytes,
    )
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        title="imobiguard",
        description="Input validation and threat detection for the CRM request boundary",
        version=__version__,
        lifespan=lifespan,
        dependencies=[Depends(detect_malicious_input)],
    )
    app.state.settings = settings

    if settings.sanitize_request_bodies:
        app.add_middleware(SanitizeBodyMiddleware)

    app.include_router(health.router)
    app.include_router(uploads.router)
    app.include_router(redirects.router)
    return app
