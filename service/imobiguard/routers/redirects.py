"""Safe redirect endpoint.

GET /api/redirect?to=...: redirect to ``to`` only if it passes the
open-redirect checks; otherwise fall back to the dashboard.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from imobiguard.guardrails.redirects import is_valid_redirect_url

logger = logging.getLogger(__name__)

router = APIRouter()

FALLBACK_REDIRECT = "/dashboard"


@router.get("/api/redirect")
async def safe_redirect(request: Request, to: str = "") -> RedirectResponse:
    settings = request.app.state.settings
    result = is_valid_redirect_url(
        to,
        settings.get_redirect_domains_set(),
        settings.get_redirect_paths(),
        allow_http=settings.allow_http_redirects,
    )

    if not result.valid:
        logger.warning("Blocked unsafe redirect to %r: %s", to, result.error)
        return RedirectResponse(FALLBACK_REDIRECT, status_code=302)

    return RedirectResponse(result.sanitized or FALLBACK_REDIRECT, status_code=302)
