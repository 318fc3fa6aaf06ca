"""Route dependencies that apply the configured bounds to query values.

Query values are declared as plain strings so malformed input reaches the
guard functions instead of failing FastAPI's own int parsing with a 422.
"""

from __future__ import annotations

from fastapi import Request

from imobiguard.guardrails.canonical import sanitize_string
from imobiguard.guardrails.structural import Pagination, validate_pagination


def get_pagination(
    request: Request, page: str | None = None, limit: str | None = None
) -> Pagination:
    """Clamp ``?page=&limit=`` using ``pagination_max_limit``."""
    settings = request.app.state.settings
    return validate_pagination(page, limit, settings.pagination_max_limit)


def get_search_text(request: Request, q: str | None = None) -> str | None:
    """Canonicalize ``?q=``, truncated to ``max_string_length``."""
    settings = request.app.state.settings
    return sanitize_string(q, settings.max_string_length) or None
