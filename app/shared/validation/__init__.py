"""
Input validation package.

Coercion primitives shared by every entity schema, the base model
the schemas derive from, and the result type returned to callers.
"""

from app.shared.validation.base import (
    EntitySchemas,
    PaginationFilter,
    PatchModel,
    SchemaModel,
    UpdateModel,
    partial_model,
    validate,
)
from app.shared.validation.result import FieldError, ValidationResult

__all__ = [
    "EntitySchemas",
    "FieldError",
    "PaginationFilter",
    "PatchModel",
    "SchemaModel",
    "UpdateModel",
    "ValidationResult",
    "partial_model",
    "validate",
]
