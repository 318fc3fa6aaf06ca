"""Open-redirect prevention for ``?redirect=`` style parameters.

Relative targets must sit under an allowed application path; absolute
targets must be https on an allowed domain. Both allow-lists are passed
in by the caller (typically from Settings) rather than kept here.
"""

from __future__ import annotations

import re
from typing import Iterable

from imobiguard.guardrails.network import parse_http_url
from imobiguard.guardrails.results import ValidationResult

_SUSPICIOUS_PATTERNS = [
    re.compile(r"^javascript:", re.IGNORECASE),
    re.compile(r"^data:", re.IGNORECASE),
    re.compile(r"^vbscript:", re.IGNORECASE),
    re.compile(r"^file:", re.IGNORECASE),
    # Percent-encoded "javascript" and "data"
    re.compile(r"%6a%61%76%61%73%63%72%69%70%74", re.IGNORECASE),
    re.compile(r"%64%61%74%61", re.IGNORECASE),
    # HTML entity encoded "j" and "a"
    re.compile(r"&#x0*6a;", re.IGNORECASE),
    re.compile(r"&#x0*61;", re.IGNORECASE),
    # Unicode escapes for "j" and "a"
    re.compile(r"\\u006a", re.IGNORECASE),
    re.compile(r"\\u0061", re.IGNORECASE),
    # Whitespace tricks inside the scheme
    re.compile(r"java\s*script:", re.IGNORECASE),
    re.compile(r"data\s*:", re.IGNORECASE),
    re.compile(r"\0"),
    re.compile(r"/{3,}"),
    re.compile(r"\\"),
]

_CONTROL_CHARS_RE = re.compile(r"[\0\r\n\t]")


def has_suspicious_patterns(url: str) -> bool:
    return any(pattern.search(url) for pattern in _SUSPICIOUS_PATTERNS)


def _clean(url: str) -> str:
    return _CONTROL_CHARS_RE.sub("", url).strip()


def _validate_relative(url: str, allowed_paths: Iterable[str]) -> ValidationResult:
    path_only = url.split("?", 1)[0].split("#", 1)[0]
    for allowed in allowed_paths:
        if path_only == allowed or path_only.startswith(f"{allowed}/"):
            return ValidationResult(valid=True, sanitized=_clean(url))
    return ValidationResult(
        valid=False, error=f"Path '{path_only}' is not in allowed redirect paths"
    )


def _validate_absolute(
    url: str, allowed_domains: Iterable[str], allow_http: bool
) -> ValidationResult:
    parsed = parse_http_url(url)
    if parsed is None:
        return ValidationResult(valid=False, error="Failed to parse absolute URL")
    hostname = (parsed.host or "").lower()

    if parsed.scheme != "https" and not (allow_http and parsed.scheme == "http"):
        return ValidationResult(valid=False, error="Only HTTPS protocol is allowed")

    for domain in allowed_domains:
        domain = domain.lower()
        if hostname == domain or hostname.endswith(f".{domain}"):
            return ValidationResult(valid=True, sanitized=_clean(url))

    return ValidationResult(
        valid=False, error=f"Domain '{hostname}' is not in allowed redirect domains"
    )


def is_valid_redirect_url(
    url: str | None,
    allowed_domains: Iterable[str],
    allowed_paths: Iterable[str],
    *,
    allow_http: bool = False,
) -> ValidationResult:
    """Decide whether ``url`` is a safe redirect target.

    On success ``result.sanitized`` holds the URL with NUL, CR, LF and TAB
    removed; redirect to that, not to the raw input.
    """
    if not url or not isinstance(url, str):
        return ValidationResult(valid=False, error="URL is required")

    trimmed = url.strip()

    if has_suspicious_patterns(trimmed):
        return ValidationResult(valid=False, error="URL contains suspicious patterns")

    # Must be checked before the single-slash case
    if trimmed.startswith("//"):
        return ValidationResult(
            valid=False, error="Protocol-relative URLs are not allowed"
        )

    if trimmed.startswith("/"):
        return _validate_relative(trimmed, allowed_paths)

    if trimmed.startswith(("http://", "https://")):
        return _validate_absolute(trimmed, allowed_domains, allow_http)

    return ValidationResult(valid=False, error="Invalid URL format")
