"""ASGI middleware that strips prototype-pollution keys from JSON bodies.

The body is buffered, decoded with the pollution-key filter, re-encoded
and replayed to the application with a corrected Content-Length. Bodies
that are not JSON objects or arrays (or are not valid JSON at all) pass
through byte-for-byte so the route can report its own parse error.
"""

from __future__ import annotations

import json
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from imobiguard.guardrails.structural import parse_json_safely

logger = logging.getLogger(__name__)


def _is_json_request(scope: Scope) -> bool:
    for name, value in scope.get("headers", []):
        if name.lower() == b"content-type":
            essence = value.decode("latin-1").split(";", 1)[0].strip().lower()
            return essence == "application/json" or essence.endswith("+json")
    return False


def _replay(pending: list[Message], receive: Receive) -> Receive:
    """Yield buffered messages first, then defer to the real receive."""

    async def wrapped() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return wrapped


class SanitizeBodyMiddleware:
    """Replace JSON request bodies with their pollution-filtered form.

    Never rejects a request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not _is_json_request(scope):
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away mid-body; let the app see the disconnect
                await self.app(scope, _replay([message], receive), send)
                return
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        payload = parse_json_safely(body) if body else None
        if isinstance(payload, (dict, list)):
            body = json.dumps(payload).encode("utf-8")
        elif body and payload is None:
            logger.debug("Passing through unparsable JSON body on %s", scope.get("path"))

        headers = [
            (name, value)
            for name, value in scope.get("headers", [])
            if name.lower() != b"content-length"
        ]
        headers.append((b"content-length", str(len(body)).encode("latin-1")))
        scope = {**scope, "headers": headers}

        replayed: Message = {"type": "http.request", "body": body, "more_body": False}
        await self.app(scope, _replay([replayed], receive), send)
