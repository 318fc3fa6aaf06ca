"""Application settings loaded from environment variables.

Uses Pydantic BaseSettings so values can come from env vars, .env files,
or defaults. All settings are validated at startup; fail fast if
something critical is missing.

The guard functions themselves never read these settings; callers pass
the relevant bounds explicitly. Settings only supply the defaults the
service shell wires into middleware and routes.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings


def _split_csv(raw: str, *, lower: bool = False) -> frozenset[str]:
    items = (item.strip() for item in raw.split(","))
    return frozenset(item.lower() if lower else item for item in items if item)


class Settings(BaseSettings):
    """Input-validation layer configuration."""

    model_config = {"env_prefix": "IMOBIGUARD_"}

    # String canonicalization
    max_string_length: int = 1000

    # Pagination
    pagination_max_limit: int = 100

    # Uploads
    max_upload_size_bytes: int = 10_485_760  # 10 MB
    allowed_upload_extensions: str = ".jpg,.jpeg,.png,.gif,.webp,.pdf,.zip,.docx"
    allowed_upload_mime_types: str = (
        "image/jpeg,image/png,image/gif,image/webp,application/pdf,application/zip,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )

    # Redirects
    allowed_redirect_domains: str = (
        "imobibase.com,www.imobibase.com,app.imobibase.com,admin.imobibase.com"
    )
    allowed_redirect_paths: str = (
        "/dashboard,/properties,/leads,/calendar,/reports,/settings,/profile,"
        "/auth/login,/auth/callback,/auth/verify-email,/auth/reset-password"
    )
    # Plain-http redirects are only acceptable in local development
    allow_http_redirects: bool = False

    # Request pipeline hooks
    sanitize_request_bodies: bool = True
    threat_logging_enabled: bool = True

    @model_validator(mode="after")
    def _validate_bounds(self) -> "Settings":
        """Reject bounds that would make every request fail validation."""
        if self.max_string_length <= 0:
            raise ValueError("max_string_length must be greater than 0.")

        if self.pagination_max_limit < 1:
            raise ValueError("pagination_max_limit must be at least 1.")

        if self.max_upload_size_bytes <= 0:
            raise ValueError("max_upload_size_bytes must be greater than 0.")

        if not _split_csv(self.allowed_upload_extensions):
            raise ValueError(
                "allowed_upload_extensions must not be empty. Provide a "
                "comma-separated list such as '.pdf,.png'."
            )
        return self

    def get_allowed_extensions_set(self) -> frozenset[str]:
        """Parse allowed_upload_extensions into a lowercased frozenset with leading dots."""
        return frozenset(
            ext if ext.startswith(".") else f".{ext}"
            for ext in _split_csv(self.allowed_upload_extensions, lower=True)
        )

    def get_allowed_mime_types_set(self) -> frozenset[str]:
        """Parse allowed_upload_mime_types into a lowercased frozenset."""
        return _split_csv(self.allowed_upload_mime_types, lower=True)

    def get_redirect_domains_set(self) -> frozenset[str]:
        return _split_csv(self.allowed_redirect_domains, lower=True)

    def get_redirect_paths(self) -> tuple[str, ...]:
        return tuple(sorted(_split_csv(self.allowed_redirect_paths)))
