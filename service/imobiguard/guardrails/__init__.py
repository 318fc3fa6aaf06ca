"""Canonicalizers, typed validators, structural guards and threat detectors.

Everything here is a pure function over its arguments: no module state,
no I/O, safe to call from any thread or event-loop task.
"""

from imobiguard.guardrails.canonical import escape_html, sanitize_html, sanitize_string
from imobiguard.guardrails.file_content import validate_file_content
from imobiguard.guardrails.network import (
    is_private_host,
    validate_external_url,
    validate_url_with_allowlist,
)
from imobiguard.guardrails.redirects import is_valid_redirect_url
from imobiguard.guardrails.results import ValidationResult
from imobiguard.guardrails.structural import (
    Pagination,
    parse_json_safely,
    sanitize_json,
    validate_file_extension,
    validate_mime_type,
    validate_pagination,
)
from imobiguard.guardrails.threats import (
    ThreatCategory,
    ThreatFinding,
    classify_threats,
    detect_command_injection,
    detect_sql_injection,
    detect_xss,
    scan_for_threats,
)
from imobiguard.guardrails.validators import (
    sanitize_email,
    sanitize_filename,
    sanitize_id,
    sanitize_phone,
    sanitize_url,
    validate_boolean,
    validate_date,
    validate_number,
)

__all__ = [
    "Pagination",
    "ThreatCategory",
    "ThreatFinding",
    "ValidationResult",
    "classify_threats",
    "detect_command_injection",
    "detect_sql_injection",
    "detect_xss",
    "escape_html",
    "is_private_host",
    "is_valid_redirect_url",
    "parse_json_safely",
    "sanitize_email",
    "sanitize_filename",
    "sanitize_html",
    "sanitize_id",
    "sanitize_json",
    "sanitize_phone",
    "sanitize_string",
    "sanitize_url",
    "scan_for_threats",
    "validate_boolean",
    "validate_date",
    "validate_external_url",
    "validate_file_content",
    "validate_file_extension",
    "validate_mime_type",
    "validate_number",
    "validate_pagination",
    "validate_url_with_allowlist",
]
