"""Magic-byte checks for uploaded files.

Rejects uploads whose bytes do not match what the client declared, so a
web shell renamed to ``photo.jpg`` never reaches storage.
"""

from __future__ import annotations

from imobiguard.guardrails.results import ValidationResult

MIN_CONTENT_BYTES = 8

_DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (extension, mime, signatures). Order matters: first match wins.
_SIGNATURES: list[tuple[str, str, tuple[bytes, ...]]] = [
    ("jpg", "image/jpeg", (b"\xff\xd8\xff",)),
    ("png", "image/png", (b"\x89PNG\r\n\x1a\n",)),
    ("gif", "image/gif", (b"GIF87a", b"GIF89a")),
    ("pdf", "application/pdf", (b"%PDF",)),
    ("zip", "application/zip", (b"PK\x03\x04", b"PK\x05\x06")),
]

# Containers that legitimately carry another declared type.
_COMPATIBLE = {
    "application/zip": frozenset({_DOCX_MIME, _XLSX_MIME, "application/x-zip-compressed"}),
    "image/jpeg": frozenset({"image/jpg", "image/pjpeg"}),
}

_EXTENSION_ALIASES = {
    "jpg": frozenset({".jpg", ".jpeg"}),
    "zip": frozenset({".zip", ".docx", ".xlsx"}),
}


def detect_content_type(data: bytes) -> tuple[str, str] | None:
    """Return (extension, mime) for recognised signatures, else None."""
    # WEBP is a RIFF container with the format tag at offset 8
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp", "image/webp"

    for ext, mime, signatures in _SIGNATURES:
        if any(data.startswith(signature) for signature in signatures):
            return ext, mime
    return None


def _normalize_mime(mime: str) -> str:
    return mime.split(";", 1)[0].strip().lower()


def validate_file_content(
    data: bytes, declared_mime: str, declared_extension: str
) -> ValidationResult:
    """Compare the sniffed type with the declared MIME type and extension."""
    if len(data) < MIN_CONTENT_BYTES:
        return ValidationResult(valid=False, error="File is too small or corrupted")

    detected = detect_content_type(data)
    if detected is None:
        return ValidationResult(
            valid=False,
            error="Could not detect file type. File may be corrupted or unsupported.",
        )

    ext, mime = detected
    declared = _normalize_mime(declared_mime)
    declared_ext = declared_extension.lower()
    if declared_ext and not declared_ext.startswith("."):
        declared_ext = f".{declared_ext}"

    mime_matches = declared == mime or declared in _COMPATIBLE.get(mime, frozenset())
    ext_matches = declared_ext in _EXTENSION_ALIASES.get(ext, frozenset({f".{ext}"}))

    if not mime_matches and not ext_matches:
        return ValidationResult(
            valid=False,
            error=(
                f"File type mismatch. Declared: {declared_mime} ({declared_extension}), "
                f"Detected: {mime} (.{ext})"
            ),
            detected_type=mime,
        )

    return ValidationResult(valid=True, detected_type=mime)
