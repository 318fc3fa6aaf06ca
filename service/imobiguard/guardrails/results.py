"""Result type shared by guards that report a reason for refusing input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ValidationResult:
    """Outcome of a guard that needs to tell the caller why it refused."""

    valid: bool
    error: str | None = None
    sanitized: str | None = None
    detected_type: str | None = None
