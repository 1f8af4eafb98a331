"""
Base models and the validation entry point for entity schemas.

Every entity declares a create model. Its update model is derived
with ``partial_model``: the same fields, all optional, plus a required
``id``. Fields absent from an update stay absent, so defaults declared
on the create model are never applied to a patch.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, create_model
from pydantic.alias_generators import to_camel

from app.shared.validation.primitives import (
    Identifier,
    PageNumber,
    PageSize,
    SortOrder,
)
from app.shared.validation.result import ValidationResult, collect_field_errors

logger = logging.getLogger(__name__)

CreateT = TypeVar("CreateT", bound="SchemaModel")
UpdateT = TypeVar("UpdateT", bound="SchemaModel")
FilterT = TypeVar("FilterT", bound="SchemaModel")
ModelT = TypeVar("ModelT", bound=BaseModel)


class SchemaModel(BaseModel):
    """Base for all input schemas.

    Public field names are camelCase; Python attributes are snake_case.
    Unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Return the validated values keyed by public field name."""
        return self.model_dump(by_alias=True)


class PatchModel(SchemaModel):
    """A partial record. Only the fields sent by the caller are kept."""

    def changes(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class UpdateModel(PatchModel):
    """A partial record keyed by identity."""

    id: Identifier

    def changes(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude={"id"})


class PaginationFilter(SchemaModel):
    """Query-string pagination and sorting shared by every list filter."""

    page: PageNumber = 1
    limit: PageSize = 10
    sort_by: str | None = None
    sort_order: SortOrder = "desc"


def partial_model(
    model: type[SchemaModel], name: str, base: type[PatchModel] = UpdateModel
) -> type[PatchModel]:
    """Derive a patch model from a create model.

    Each field keeps its type and validators but loses its default.
    The default becomes an unvalidated ``None`` so an absent field is
    simply unset, while an explicit value still goes through the full
    validation chain.
    """
    fields: dict[str, Any] = {
        field_name: (field.rebuild_annotation(), None)
        for field_name, field in model.model_fields.items()
    }
    return create_model(name, __base__=base, __module__=model.__module__, **fields)


def validate(model: type[ModelT], raw: Any) -> ValidationResult[ModelT]:
    """Validate a raw record against a schema without raising.

    Args:
        model: The schema to validate against.
        raw: Untyped input from a request body, query string or path.

    Returns:
        A result with the typed model, or with one error per bad field.
    """
    try:
        data = model.model_validate({} if raw is None else raw)
    except ValidationError as exc:
        errors = collect_field_errors(exc)
        logger.debug(
            "%s rejected fields: %s",
            model.__name__,
            ", ".join(error.field for error in errors),
        )
        return ValidationResult(errors=errors)
    return ValidationResult(data=data)


@dataclass(frozen=True)
class EntitySchemas(Generic[CreateT, UpdateT, FilterT]):
    """The create, update and filter schemas of one entity."""

    name: str
    create: type[CreateT]
    update: type[UpdateT]
    filter: type[FilterT]

    def validate_create(self, raw: Any) -> ValidationResult[CreateT]:
        return validate(self.create, raw)

    def validate_update(self, raw: Any) -> ValidationResult[UpdateT]:
        return validate(self.update, raw)

    def validate_filter(self, raw: Any) -> ValidationResult[FilterT]:
        return validate(self.filter, raw)
