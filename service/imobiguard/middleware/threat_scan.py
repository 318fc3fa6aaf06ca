"""Request dependency that logs suspicious input without blocking it.

Install app-wide with ``FastAPI(dependencies=[Depends(detect_malicious_input)])``.
It runs after routing, so path params are available alongside the query
string and the body: JSON, or the text fields of a form post. Every
positive detector match produces one WARNING; the request always
continues. Blocking is a separate policy decision for callers to layer
on top.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Request
from starlette.exceptions import HTTPException

from imobiguard.guardrails.structural import parse_json_safely
from imobiguard.guardrails.threats import ThreatFinding, scan_for_threats

logger = logging.getLogger(__name__)

# Attack payloads can be huge; the log line only needs enough to triage.
_MAX_LOGGED_VALUE = 200

_FORM_CONTENT_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data"}
)


def log_findings(findings: Iterable[ThreatFinding]) -> int:
    """Emit one warning per finding and return how many were logged."""
    count = 0
    for finding in findings:
        logger.warning(
            "Potential %s attempt detected in %s: %r",
            finding.category.value,
            finding.path,
            finding.value[:_MAX_LOGGED_VALUE],
            extra={
                "threat_category": finding.category.value,
                "threat_path": finding.path,
            },
        )
        count += 1
    return count


def collect_request_findings(
    body: object, query: Iterable[tuple[str, str]], params: dict[str, object]
) -> list[ThreatFinding]:
    """Scan body, query and path params, in that order."""
    findings: list[ThreatFinding] = []
    if body is not None:
        findings.extend(scan_for_threats(body, "body"))
    for key, value in query:
        findings.extend(scan_for_threats(value, f"query.{key}"))
    for key, value in params.items():
        findings.extend(scan_for_threats(value, f"params.{key}"))
    return findings


async def _form_body(request: Request) -> dict[str, object] | None:
    """Text fields of a form post; repeated keys become lists, files are skipped."""
    try:
        form = await request.form()
    except HTTPException as exc:
        logger.debug("Skipping unparsable form body on %s: %s", request.url.path, exc.detail)
        return None

    fields: dict[str, object] = {}
    for key, value in form.multi_items():
        if not isinstance(value, str):
            continue
        if key not in fields:
            fields[key] = value
        elif isinstance(fields[key], list):
            fields[key].append(value)
        else:
            fields[key] = [fields[key], value]
    return fields


async def _request_body(request: Request) -> object | None:
    content_type = request.headers.get("content-type", "")
    essence = content_type.split(";", 1)[0].strip().lower()
    if essence in _FORM_CONTENT_TYPES:
        return await _form_body(request)
    if essence != "application/json" and not essence.endswith("+json"):
        return None
    raw = await request.body()
    if not raw:
        return None
    return parse_json_safely(raw)


async def detect_malicious_input(request: Request) -> None:
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and not settings.threat_logging_enabled:
        return

    findings = collect_request_findings(
        await _request_body(request),
        request.query_params.multi_items(),
        request.path_params,
    )
    log_findings(findings)
