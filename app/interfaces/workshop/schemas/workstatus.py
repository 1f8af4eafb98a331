"""Work status schemas.

Work statuses are the ordered columns of the service board.
"""

from pydantic import Field

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Identifier, Name, text

DEFAULT_COLOR = "#6B7280"

HexColor = text(
    pattern=r"^#[0-9A-Fa-f]{6}$",
    mismatch="Color debe ser un código hexadecimal válido",
)


class CreateWorkStatusInput(SchemaModel):
    name: Name
    order_index: int = Field(ge=1)
    color: HexColor = DEFAULT_COLOR


UpdateWorkStatusInput = partial_model(CreateWorkStatusInput, "UpdateWorkStatusInput")


class StatusOrder(SchemaModel):
    id: Identifier
    order_index: int = Field(ge=1)


class ReorderWorkStatusesInput(SchemaModel):
    """New board positions for a set of work statuses."""

    status_orders: list[StatusOrder] = Field(min_length=1)


class WorkStatusFilter(PaginationFilter):
    search: str | None = None


WORK_STATUS_SCHEMAS = EntitySchemas(
    name="workstatus",
    create=CreateWorkStatusInput,
    update=UpdateWorkStatusInput,
    filter=WorkStatusFilter,
)
