"""Upload pre-check endpoint.

POST /api/uploads/check: validate an upload's name, declared type, size
and magic bytes before the caller hands it to storage.

Nothing is stored here; the response tells the caller the sanitized name
to store the file under and the content type that was actually detected.
"""

from __future__ import annotations

import logging
import posixpath

from fastapi import APIRouter, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from imobiguard.guardrails.file_content import validate_file_content
from imobiguard.guardrails.structural import validate_file_extension, validate_mime_type
from imobiguard.guardrails.validators import sanitize_filename

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadCheckResponse(BaseModel):
    file_name: str
    original_name: str
    content_type: str
    detected_type: str | None = None
    size_bytes: int
    status: str = "accepted"


def _reject(detail: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": detail})


@router.post("/api/uploads/check", response_model=None)
async def check_upload(request: Request, file: UploadFile) -> UploadCheckResponse | JSONResponse:
    settings = request.app.state.settings

    original_name = file.filename or ""
    safe_name = sanitize_filename(original_name)
    if safe_name is None:
        return _reject("Invalid file name.")

    ext = posixpath.splitext(safe_name)[1].lower()
    if not validate_file_extension(safe_name, settings.get_allowed_extensions_set()):
        return _reject(f"File type '{ext or safe_name}' is not supported.")

    content_type = file.content_type or ""
    if not validate_mime_type(content_type, settings.get_allowed_mime_types_set()):
        return _reject(f"Content type '{content_type}' is not supported.")

    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        max_mb = settings.max_upload_size_bytes / (1024 * 1024)
        return _reject(f"File exceeds maximum size of {max_mb:.0f} MB.")

    result = validate_file_content(content, content_type, ext)
    if not result.valid:
        logger.warning(
            "Rejected upload %r (declared %s): %s",
            original_name,
            content_type,
            result.error,
        )
        return _reject(result.error or "File content is not valid.")

    return UploadCheckResponse(
        file_name=safe_name,
        original_name=original_name,
        content_type=content_type,
        detected_type=result.detected_type,
        size_bytes=len(content),
    )
