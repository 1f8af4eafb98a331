"""
Validation results and localized field errors.

A validator never raises on bad input. It returns a ValidationResult
holding either the typed model or one FieldError per offending field.
Messages are in Spanish so they can be shown to users as-is.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

ModelT = TypeVar("ModelT")

# Messages for pydantic's built-in error types. Errors raised by our own
# validators already carry a Spanish message and are passed through.
BUILTIN_MESSAGES: dict[str, str] = {
    "missing": "Campo requerido",
    "string_type": "Debe ser texto",
    "int_type": "Debe ser un número entero",
    "int_parsing": "Debe ser un número entero",
    "int_from_float": "Debe ser un número entero",
    "float_type": "Debe ser un número",
    "float_parsing": "Debe ser un número",
    "bool_type": "Debe ser verdadero o falso",
    "bool_parsing": "Debe ser verdadero o falso",
    "literal_error": "Valor no permitido",
    "enum": "Valor no permitido",
    "model_type": "Se esperaba un objeto",
    "model_attributes_type": "Se esperaba un objeto",
    "dict_type": "Se esperaba un objeto",
    "greater_than": "Debe ser mayor a {gt}",
    "greater_than_equal": "Debe ser mayor o igual a {ge}",
    "less_than": "Debe ser menor a {lt}",
    "less_than_equal": "Debe ser menor o igual a {le}",
    "string_too_short": "Debe tener al menos {min_length} caracteres",
    "string_too_long": "No puede exceder {max_length} caracteres",
    "string_pattern_mismatch": "Formato inválido",
    "too_short": "Debe tener al menos {min_length} elementos",
}


@dataclass(frozen=True)
class FieldError:
    """A single failed field.

    Attributes:
        field: Dotted path of the field, using the public (camelCase) name.
        message: Localized, user-facing description of the failure.
    """

    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating one raw record.

    Exactly one of ``data`` and ``errors`` is meaningful: a successful
    result has a model and no errors.
    """

    data: ModelT | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def failed_fields(self) -> list[str]:
        return [error.field for error in self.errors]


def translate_error(error: dict[str, Any]) -> str:
    """Return the Spanish message for one pydantic error entry."""
    template = BUILTIN_MESSAGES.get(error["type"])
    if template is None:
        return error["msg"]
    try:
        return template.format(**error.get("ctx", {}))
    except (KeyError, IndexError):
        return template


def collect_field_errors(exc: ValidationError) -> tuple[FieldError, ...]:
    """Flatten a pydantic ValidationError into one FieldError per field.

    Pydantic already reports every failing field. When a field yields
    more than one entry only the first is kept, so each field has a
    single message.
    """
    seen: dict[str, FieldError] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        if field not in seen:
            seen[field] = FieldError(field=field, message=translate_error(error))
    return tuple(seen.values())
