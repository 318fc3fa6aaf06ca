"""SSRF guards for user-supplied URLs.

All checks are on the literal hostname; no DNS resolution happens here.
A hostname that *resolves* to a private address passes these checks, so
code that actually opens a connection must resolve first and run
is_private_host on the resulting IP (DNS rebinding).
"""

from __future__ import annotations

import ipaddress

from pydantic import AnyUrl, TypeAdapter, ValidationError

from imobiguard.guardrails.results import ValidationResult

_URL_ADAPTER = TypeAdapter(AnyUrl)

ALLOWED_SCHEMES = frozenset({"http", "https"})

_LOCAL_HOSTNAMES = frozenset({"localhost", "0.0.0.0", "::", "::1"})

_PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(net)
    for net in (
        "127.0.0.0/8",
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "169.254.0.0/16",
        "::1/128",
        "fe80::/10",
        "fc00::/7",
    )
)

# Additional ranges refused for outbound fetches (validate_external_url).
_NON_ROUTABLE_NETWORKS = tuple(
    ipaddress.ip_network(net)
    for net in (
        "0.0.0.0/8",
        "224.0.0.0/4",  # multicast
        "240.0.0.0/4",  # reserved
    )
)

# Cloud metadata endpoints, matched exactly or as a parent domain.
_METADATA_HOSTS = (
    "169.254.169.254",
    "metadata.google.internal",
    "fd00:ec2::254",
)


def _normalize_host(hostname: str) -> str:
    return hostname.strip().lower().strip("[]").rstrip(".")


def _as_ip(host: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def is_private_host(hostname: str) -> bool:
    """True if hostname is a loopback, private or link-local literal."""
    host = _normalize_host(hostname)
    if host in _LOCAL_HOSTNAMES:
        return True

    ip = _as_ip(host)
    if ip is None:
        return False
    return any(ip in net for net in _PRIVATE_NETWORKS if net.version == ip.version)


def parse_http_url(url: str) -> AnyUrl | None:
    """Parse with the WHATWG URL rules; None unless the scheme is http(s).

    The parser normalizes numeric host forms (``0x7f000001``, ``2130706433``)
    to dotted quads, so the private-range check sees the real address.
    """
    try:
        parsed = _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return None
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.host:
        return None
    return parsed


def validate_external_url(url: str) -> ValidationResult:
    """Check a URL the server is about to fetch on a user's behalf."""
    if not isinstance(url, str) or not url.strip():
        return ValidationResult(valid=False, error="URL is required")

    try:
        parsed = _URL_ADAPTER.validate_python(url.strip())
    except ValidationError:
        return ValidationResult(valid=False, error="Invalid URL format")

    if parsed.scheme not in ALLOWED_SCHEMES:
        return ValidationResult(
            valid=False,
            error=f"Protocol {parsed.scheme}: not allowed. Only HTTP/HTTPS permitted.",
        )

    host = _normalize_host(parsed.host or "")
    if not host:
        return ValidationResult(valid=False, error="URL has no host")

    for blocked in _METADATA_HOSTS:
        if host == blocked or host.endswith(f".{blocked}"):
            return ValidationResult(
                valid=False, error="Access to internal resources is forbidden"
            )

    if is_private_host(host):
        return ValidationResult(
            valid=False, error="Access to private IP addresses is forbidden"
        )

    ip = _as_ip(host)
    if ip is not None and any(
        ip in net for net in _NON_ROUTABLE_NETWORKS if net.version == ip.version
    ):
        return ValidationResult(
            valid=False, error="Access to non-routable IP addresses is forbidden"
        )

    return ValidationResult(valid=True, sanitized=str(parsed))


def validate_url_with_allowlist(
    url: str, allowed_domains: frozenset[str] | list[str]
) -> ValidationResult:
    """validate_external_url plus a domain allowlist (exact or subdomain)."""
    result = validate_external_url(url)
    if not result.valid:
        return result

    host = _normalize_host(_URL_ADAPTER.validate_python(url.strip()).host or "")
    for domain in allowed_domains:
        domain = domain.strip().lower()
        if host == domain or host.endswith(f".{domain}"):
            return result

    return ValidationResult(
        valid=False, error=f"Domain {host} is not in the allowed list"
    )
