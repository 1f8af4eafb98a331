"""Mechanic schemas."""

from pydantic import Field

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Flag, Name, Phone


class CreateMechanicInput(SchemaModel):
    name: Name
    phone: Phone | None = None
    commission_percentage: float = Field(default=0, ge=0, le=100)
    is_active: bool = True


UpdateMechanicInput = partial_model(CreateMechanicInput, "UpdateMechanicInput")


class MechanicFilter(PaginationFilter):
    search: str | None = None
    is_active: Flag | None = None


MECHANIC_SCHEMAS = EntitySchemas(
    name="mechanic",
    create=CreateMechanicInput,
    update=UpdateMechanicInput,
    filter=MechanicFilter,
)
