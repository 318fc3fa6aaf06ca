"""Typed validators for values arriving from a request boundary.

Each function returns the canonical domain value on success and None on
any malformation. Malformed input is an expected condition here, so none
of these raise for attacker-controlled data; the caller decides what
error to show.
"""

from __future__ import annotations

import math
import posixpath
import re
from datetime import datetime
from typing import Any

from dateutil import parser as dateutil_parser

from imobiguard.guardrails.canonical import sanitize_string
from imobiguard.guardrails.network import is_private_host, parse_http_url

MAX_EMAIL_LENGTH = 255
MAX_URL_LENGTH = 2048
MAX_FILENAME_LENGTH = 255
MAX_ID_LENGTH = 50
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15
MIN_YEAR = 1900
MAX_YEAR = 2100

# RFC 5322, simplified
_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)
_NON_DIGIT_RE = re.compile(r"\D", re.ASCII)
_UNSAFE_FILENAME_CHAR_RE = re.compile(r"[^a-zA-Z0-9._-]")
_ID_RE = re.compile(r"[a-zA-Z0-9_-]+")
_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


def sanitize_email(email: Any) -> str | None:
    """Return the lower-cased address, or None if it is not a plausible email."""
    sanitized = sanitize_string(email, max_length=MAX_EMAIL_LENGTH + 1)
    if not sanitized or len(sanitized) > MAX_EMAIL_LENGTH:
        return None

    if not _EMAIL_RE.fullmatch(sanitized):
        return None

    return sanitized.lower()


def sanitize_phone(phone: Any) -> str | None:
    """Strip formatting and return 10-15 ASCII digits."""
    if not isinstance(phone, str):
        return None

    digits = _NON_DIGIT_RE.sub("", phone)
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        return None

    return digits


def sanitize_url(url: Any) -> str | None:
    """Return the re-serialized http(s) URL, refusing private hosts (SSRF)."""
    sanitized = sanitize_string(url, max_length=MAX_URL_LENGTH + 1)
    if not sanitized or len(sanitized) > MAX_URL_LENGTH:
        return None

    parsed = parse_http_url(sanitized)
    if parsed is None:
        return None

    if is_private_host(parsed.host):
        return None

    return str(parsed)


def _truncate_keeping_extension(name: str, limit: int) -> str:
    if len(name) <= limit:
        return name
    base, ext = posixpath.splitext(name)
    if len(ext) >= limit:
        return name[:limit]
    return base[: limit - len(ext)] + ext


def sanitize_filename(filename: Any) -> str | None:
    """Reduce an uploaded filename to a safe basename.

    Path components, NUL bytes, ``..`` sequences and leading dots are
    removed; anything outside ``[a-zA-Z0-9._-]`` becomes ``_``. Long names
    are cut to 255 characters with the extension kept intact.
    """
    if not isinstance(filename, str):
        return None

    # Take only the final path component (prevents path traversal)
    name = filename.rstrip("/\\")
    name = name.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]
    name = name.replace("\0", "")
    name = name.replace("..", "")
    name = name.lstrip(".")
    name = _UNSAFE_FILENAME_CHAR_RE.sub("_", name)
    name = _truncate_keeping_extension(name, MAX_FILENAME_LENGTH)

    return name or None


def sanitize_id(value: Any) -> str | None:
    """Validate an opaque identifier (nanoid, UUID or numeric)."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    # Bounded before str(): huge ints exceed the int-string conversion limit
    if isinstance(value, int) and abs(value) >= 10**MAX_ID_LENGTH:
        return None

    sanitized = str(value).strip()
    if len(sanitized) > MAX_ID_LENGTH or not _ID_RE.fullmatch(sanitized):
        return None

    return sanitized


def validate_date(value: Any) -> datetime | None:
    """Parse a date string; years outside 1900-2100 are rejected."""
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = dateutil_parser.parse(value)
    except (ValueError, OverflowError):
        return None

    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return None

    return parsed


def validate_number(
    value: Any,
    min_value: float = -math.inf,
    max_value: float = math.inf,
) -> int | float | None:
    """Coerce to a finite number inside [min_value, max_value]."""
    number: int | float
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_RE.fullmatch(text):
            return None
        number = float(text)
        if number.is_integer() and "." not in text and "e" not in text.lower():
            number = int(text)
    else:
        return None

    if isinstance(number, float) and not math.isfinite(number):
        return None

    if number < min_value or number > max_value:
        return None

    return number


def validate_boolean(value: Any) -> bool | None:
    """Accept booleans, ``true/1/yes`` and ``false/0/no`` strings, and numbers."""
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return None

    if isinstance(value, (int, float)):
        return value != 0

    return None
