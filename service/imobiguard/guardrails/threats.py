"""Heuristic detection of SQL injection, XSS and command injection.

These detectors feed logging and alerting only. They are regex
heuristics with known false positives (an apostrophe followed by "or")
and false negatives (double encoding, comment-split keywords).
Parameterized queries, output encoding and process-spawn allow-lists
remain the actual defenses; never turn a positive here into a hard
block without accepting that trade-off.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


class ThreatCategory(str, Enum):
    SQL_INJECTION = "sql_injection"
    XSS = "xss"
    COMMAND_INJECTION = "command_injection"


@dataclass(frozen=True)
class ThreatFinding:
    """A positive detector match on one string leaf of a request."""

    category: ThreatCategory
    path: str
    value: str


_SQL_PATTERNS = [
    re.compile(r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE)\b", re.IGNORECASE),
    re.compile(r"UNION\s+SELECT", re.IGNORECASE),
    re.compile(r"--"),
    re.compile(r";.*--"),
    re.compile(r"'.*OR.*'.*=", re.IGNORECASE),
    re.compile(r"\".*OR.*\".*=", re.IGNORECASE),
    re.compile(r"\bOR\b.*=.*\bOR\b", re.IGNORECASE),
    re.compile(r"'.*\bOR\b.*", re.IGNORECASE),
]

_XSS_PATTERNS = [
    re.compile(r"<script[^>]*>.*</script>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
    re.compile(r"eval\(", re.IGNORECASE),
    re.compile(r"expression\(", re.IGNORECASE),
]

_COMMAND_PATTERNS = [
    re.compile(r"[;&|`$]"),
    re.compile(r"\$\("),
    re.compile(r"\.\./"),
    re.compile(r"\\"),
    re.compile(r"[\n\r]"),
]


def _matches_any(patterns: list[re.Pattern], text: Any) -> bool:
    if not isinstance(text, str):
        return False
    return any(pattern.search(text) for pattern in patterns)


def detect_sql_injection(text: str) -> bool:
    """True if the raw string looks like a SQL injection attempt."""
    return _matches_any(_SQL_PATTERNS, text)


def detect_xss(text: str) -> bool:
    """True if the raw string carries script-like markup or handlers."""
    return _matches_any(_XSS_PATTERNS, text)


def detect_command_injection(text: str) -> bool:
    """True if the raw string has shell metacharacters, traversal or newlines."""
    return _matches_any(_COMMAND_PATTERNS, text)


_DETECTORS = (
    (ThreatCategory.SQL_INJECTION, detect_sql_injection),
    (ThreatCategory.XSS, detect_xss),
    (ThreatCategory.COMMAND_INJECTION, detect_command_injection),
)


def classify_threats(text: str) -> dict[ThreatCategory, bool]:
    """Run every detector on one string."""
    return {category: detector(text) for category, detector in _DETECTORS}


def scan_for_threats(value: Any, path: str = "body") -> Iterator[ThreatFinding]:
    """Walk a decoded payload and yield a finding per category per string leaf.

    Dict keys extend the path as ``path.key``; list items as ``path.0``.
    """
    if isinstance(value, str):
        for category, detector in _DETECTORS:
            if detector(value):
                yield ThreatFinding(category=category, path=path, value=value)
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from scan_for_threats(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from scan_for_threats(item, f"{path}.{index}")
