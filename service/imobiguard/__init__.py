"""Request-boundary input validation and threat detection for the CRM API."""

__version__ = "0.1.0"
