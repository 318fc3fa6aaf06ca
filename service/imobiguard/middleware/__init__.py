"""Request-pipeline hooks: body sanitization and suspicious-input logging."""

from imobiguard.middleware.sanitize_body import SanitizeBodyMiddleware
from imobiguard.middleware.threat_scan import detect_malicious_input

__all__ = ["SanitizeBodyMiddleware", "detect_malicious_input"]
