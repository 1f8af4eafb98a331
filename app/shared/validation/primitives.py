"""
Coercion primitives shared by every entity schema.

These annotated types are the single definition of how ids, dates,
phones, emails, pagination and query flags are parsed. Entity schemas
must reuse them instead of declaring equivalent rules.

Each primitive validates type first and then its own constraints in
order, stopping at the first failure for that field.
"""

import logging
import re
from datetime import date, datetime
from typing import Annotated, Any, Literal
from urllib.parse import urlparse

from dateutil.parser import isoparse
from pydantic import AfterValidator, BeforeValidator, PlainValidator
from pydantic_core import PydanticCustomError

from app.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

DIGITS_PATTERN = re.compile(r"^\d+$")
PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-()]+$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_MIN_LENGTH = 10


def _invalid_identifier() -> PydanticCustomError:
    return PydanticCustomError("invalid_identifier", "ID debe ser un número válido")


def _parse_identifier(value: Any) -> Any:
    if isinstance(value, bool):
        raise _invalid_identifier()
    if isinstance(value, str):
        candidate = value.strip()
        if not DIGITS_PATTERN.match(candidate):
            raise _invalid_identifier()
        try:
            return int(candidate)
        except ValueError:
            # Past the interpreter's integer string conversion limit
            raise _invalid_identifier() from None
    return value


def _require_positive(value: int) -> int:
    if value <= 0:
        raise PydanticCustomError(
            "invalid_identifier", "ID debe ser un número positivo"
        )
    return value


Identifier = Annotated[
    int, BeforeValidator(_parse_identifier), AfterValidator(_require_positive)
]
"""Positive integer id. Numeric strings (path and query values) are coerced."""


def parse_date(value: Any) -> datetime | date:
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str) and "T" in value:
        try:
            return isoparse(value)
        except ValueError:
            pass
    raise PydanticCustomError("invalid_date", "Fecha inválida")


DateValue = Annotated[datetime | date, PlainValidator(parse_date)]
"""ISO-8601 datetime string or an already-typed date/datetime."""


def _check_phone(value: str) -> str:
    if len(value) < PHONE_MIN_LENGTH:
        raise PydanticCustomError(
            "invalid_phone", "El teléfono debe tener al menos 10 dígitos"
        )
    if not PHONE_PATTERN.match(value):
        raise PydanticCustomError("invalid_phone", "Formato de teléfono inválido")
    return value


Phone = Annotated[str, AfterValidator(_check_phone)]


def _check_required_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("invalid_email", "Email inválido")
    return value


def _check_email(value: str) -> str:
    # An empty string is the accepted "no email" value
    if value == "":
        return value
    return _check_required_email(value)


Email = Annotated[str, AfterValidator(_check_email)]
"""Optional email: a valid address or an empty string."""

RequiredEmail = Annotated[str, AfterValidator(_check_required_email)]
"""A valid address. The empty string is rejected."""


def _check_url(value: str) -> str:
    if value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise PydanticCustomError("invalid_url", "URL inválida")
    return value


OptionalUrl = Annotated[str, AfterValidator(_check_url)]
"""Absolute http(s) URL, or an empty string."""


def _positive_or_default(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, str) and DIGITS_PATTERN.match(value.strip()):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def _coerce_page(value: Any) -> int:
    return _positive_or_default(value, DEFAULT_PAGE)


def _coerce_limit(value: Any) -> int:
    limit = _positive_or_default(value, DEFAULT_PAGE_SIZE)
    if limit > settings.large_page_size_warning:
        logger.warning(
            "Page size %d exceeds %d; returning it uncapped",
            limit,
            settings.large_page_size_warning,
        )
    return limit


PageNumber = Annotated[int, BeforeValidator(_coerce_page)]
PageSize = Annotated[int, BeforeValidator(_coerce_limit)]


def _coerce_sort_order(value: Any) -> str:
    return value if value in ("asc", "desc") else "desc"


SortOrder = Annotated[Literal["asc", "desc"], BeforeValidator(_coerce_sort_order)]


def _parse_flag(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value


Flag = Annotated[bool, BeforeValidator(_parse_flag)]
"""Boolean that also accepts the query-string forms "true" and "false"."""


def _empty_to_none(value: Any) -> Any:
    return None if value == "" else value


NullableText = Annotated[str | None, BeforeValidator(_empty_to_none)]
"""Optional free text where an empty string is stored as null."""


def text(
    base: Any = str,
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
    too_short: str | None = None,
    too_long: str | None = None,
    mismatch: str = "Formato inválido",
) -> Any:
    """Build a string type with length bounds and an optional pattern.

    Checks run after the rules of ``base``, in declaration order:
    minimum length, maximum length, then pattern. Each failure raises
    its own localized message.
    """
    compiled = re.compile(pattern) if pattern else None

    def check(value: str) -> str:
        if min_length is not None and len(value) < min_length:
            raise PydanticCustomError(
                "text_too_short",
                too_short or f"Debe tener al menos {min_length} caracteres",
            )
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "text_too_long",
                too_long or f"No puede exceder {max_length} caracteres",
            )
        if compiled is not None and not compiled.match(value):
            raise PydanticCustomError("text_pattern", mismatch)
        return value

    return Annotated[base, AfterValidator(check)]


Name = text(min_length=2, too_short="El nombre debe tener al menos 2 caracteres")
