"""String canonicalization and HTML output helpers.

Every other validator builds on sanitize_string. sanitize_html is a
best-effort denylist for plain-text-ish fields that occasionally carry
markup; it is NOT a DOM-based sanitizer and must not be the only thing
standing between untrusted HTML and a browser. Prefer escape_html when
rendering untrusted text.
"""

from __future__ import annotations

import re
from typing import Any

DEFAULT_MAX_LENGTH = 1000

_SCRIPT_BLOCK = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
)
_QUOTED_EVENT_HANDLER = re.compile(r"on\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_UNQUOTED_EVENT_HANDLER = re.compile(r"on\w+\s*=\s*[^\s>]*", re.IGNORECASE)

# Stripped before the tag denylist so nothing can hide inside a removed tag.
_DANGEROUS_PROTOCOLS = [
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
]

_DANGEROUS_TAGS = ("iframe", "embed", "object", "applet", "meta", "link", "style")
_DANGEROUS_TAG_BLOCKS = [
    re.compile(rf"<{tag}\b[^<]*(?:(?!</{tag}>)<[^<]*)*</{tag}>", re.IGNORECASE)
    for tag in _DANGEROUS_TAGS
]

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
    }
)


def sanitize_string(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str | None:
    """Canonicalize an untrusted string.

    Removes NUL bytes, strips surrounding whitespace and silently clamps
    to ``max_length`` characters. Returns None for non-string input.
    """
    if not isinstance(value, str):
        return None

    sanitized = value.replace("\0", "").strip()
    if len(sanitized) > max_length:
        # The cut can expose trailing whitespace; strip it again so a second
        # pass is a no-op.
        sanitized = sanitized[:max_length].rstrip()
    return sanitized


def sanitize_html(html: str | None) -> str:
    """Remove script blocks, inline handlers, dangerous URIs and tags."""
    if not html:
        return ""

    sanitized = _SCRIPT_BLOCK.sub("", html)
    sanitized = _QUOTED_EVENT_HANDLER.sub("", sanitized)
    sanitized = _UNQUOTED_EVENT_HANDLER.sub("", sanitized)

    for pattern in _DANGEROUS_PROTOCOLS:
        sanitized = pattern.sub("", sanitized)

    for pattern in _DANGEROUS_TAG_BLOCKS:
        sanitized = pattern.sub("", sanitized)

    return sanitized


def escape_html(text: str) -> str:
    """Escape ``& < > " ' /`` for safe inclusion in HTML text and attributes."""
    return text.translate(_HTML_ESCAPES)
