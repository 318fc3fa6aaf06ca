"""Structural guards: JSON key filtering, pagination bounds, upload allow-lists."""

from __future__ import annotations

import json
import posixpath
import re
import sys
from typing import Any, Iterable, NamedTuple

# Keys that can reach a shared prototype when a JSON-decoded object is
# handed to JavaScript code downstream (prototype pollution).
POLLUTION_KEYS = frozenset({"__proto__", "constructor", "prototype"})

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
DEFAULT_MAX_LIMIT = 100

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


class Pagination(NamedTuple):
    page: int
    limit: int


def _drop_pollution_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in pairs if key not in POLLUTION_KEYS}


def parse_json_safely(raw: str | bytes) -> Any | None:
    """Decode JSON, dropping pollution keys as each object is built.

    Returns None when the payload is not valid JSON.
    """
    try:
        return json.loads(raw, object_pairs_hook=_drop_pollution_keys)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        return None


def sanitize_json(value: Any) -> Any | None:
    """Deep-copy a dict or list with every pollution key removed.

    The value is serialized and decoded again, so the result shares no
    references with the input. Anything that is not a dict or list, or
    that cannot be serialized as JSON, yields None.
    """
    if not isinstance(value, (dict, list)):
        return None

    try:
        encoded = json.dumps(value)
    except (TypeError, ValueError, RecursionError):
        return None

    return parse_json_safely(encoded)


def _parse_leading_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    match =_LEADING_INT_RE.match(str(value))
    if match is None:
        return None
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError:
        # Longer than the interpreter's int-string limit; saturate
        return -sys.maxsize if digits.startswith("-") else sys.maxsize


def validate_pagination(
    page: Any, limit: Any, max_limit: int = DEFAULT_MAX_LIMIT
) -> Pagination:
    """Clamp page to >= 1 and limit to [1, max_limit]. Never rejects.

    Unparsable or zero values fall back to the defaults (page 1, limit 50).
    """
    parsed_page = _parse_leading_int(page) or DEFAULT_PAGE
    parsed_limit = _parse_leading_int(limit) or DEFAULT_LIMIT

    return Pagination(
        page=max(1, parsed_page),
        limit=min(max_limit, max(1, parsed_limit)),
    )


def validate_file_extension(filename: str, allowed_extensions: Iterable[str]) -> bool:
    """Case-insensitive check of the filename's extension (``.pdf``) against a list."""
    ext = posixpath.splitext(filename)[1].lower()
    return ext in {allowed.lower() for allowed in allowed_extensions}


def validate_mime_type(mime_type: str, allowed_types: Iterable[str]) -> bool:
    """Case-insensitive MIME allow-list check; parameters like charset are ignored."""
    essence = mime_type.split(";", 1)[0].strip().lower()
    return essence in {allowed.lower() for allowed in allowed_types}
