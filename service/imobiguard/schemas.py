"""Reusable field types for composing request schemas.

Each entry is a pydantic ``Annotated`` type, so route models can use them
directly::

    class LeadContact(BaseModel):
        email: Email
        phone: Phone | None = None

Unlike the functions in ``imobiguard.guardrails``, these raise
``pydantic.ValidationError``; FastAPI turns that into a 422 response.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from functools import lru_cache
from typing import Annotated, Any
from uuid import UUID

from pydantic import (
    AfterValidator,
    AnyUrl,
    Field,
    StrictInt,
    StringConstraints,
    TypeAdapter,
    UrlConstraints,
)

from imobiguard.guardrails.validators import MAX_YEAR, MIN_YEAR

# Simplified RFC 5322; unlike sanitize_email, the domain needs at least one dot
_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+"
)
_FORBIDDEN_FILENAME_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def _check_email(value: str) -> str:
    if not _EMAIL_RE.fullmatch(value):
        raise ValueError("Invalid email address")
    return value.lower()


def _check_filename(value: str) -> str:
    if _FORBIDDEN_FILENAME_CHARS_RE.search(value):
        raise ValueError("Invalid filename characters")
    return value


def _check_year_range(value: datetime) -> datetime:
    if not MIN_YEAR <= value.year <= MAX_YEAR:
        raise ValueError("Date out of valid range")
    return value


Email = Annotated[str, StringConstraints(max_length=255), AfterValidator(_check_email)]
Phone = Annotated[str, StringConstraints(pattern=r"^\+?[1-9][0-9]{9,14}$")]
Url = Annotated[AnyUrl, UrlConstraints(max_length=2048)]
Id = Annotated[str, StringConstraints(pattern=r"^[a-zA-Z0-9_-]+$", max_length=50)]
Filename = Annotated[str, StringConstraints(max_length=255), AfterValidator(_check_filename)]
DateInRange = Annotated[datetime, AfterValidator(_check_year_range)]
PositiveInt = Annotated[StrictInt, Field(gt=0)]
NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
Percentage = Annotated[float, Field(ge=0, le=100)]
Currency = Annotated[Decimal, Field(ge=0, decimal_places=2)]
Cpf = Annotated[str, StringConstraints(pattern=r"^[0-9]{11}$")]
Cnpj = Annotated[str, StringConstraints(pattern=r"^[0-9]{14}$")]
Cep = Annotated[str, StringConstraints(pattern=r"^[0-9]{8}$")]
Uuid = UUID
NanoId = Annotated[str, StringConstraints(pattern=r"^[a-zA-Z0-9_-]{21}$")]

COMMON_SCHEMAS: dict[str, Any] = {
    "email": Email,
    "phone": Phone,
    "url": Url,
    "id": Id,
    "filename": Filename,
    "date": DateInRange,
    "positive_int": PositiveInt,
    "non_negative_int": NonNegativeInt,
    "percentage": Percentage,
    "currency": Currency,
    "cpf": Cpf,
    "cnpj": Cnpj,
    "cep": Cep,
    "uuid": Uuid,
    "nanoid": NanoId,
}


@lru_cache(maxsize=None)
def _adapter(name: str) -> TypeAdapter:
    return TypeAdapter(COMMON_SCHEMAS[name])


def validate_with(name: str, value: Any) -> Any:
    """Validate ``value`` against a named schema.

    Raises KeyError for an unknown name and ``pydantic.ValidationError``
    for invalid data.
    """
    return _adapter(name).validate_python(value)
