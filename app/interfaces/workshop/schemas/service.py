"""Service (work order) schemas."""

from pydantic import Field

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import DateValue, Identifier

DEFAULT_STATUS_ID = 1


class CreateServiceInput(SchemaModel):
    appointment_id: Identifier | None = None
    client_id: Identifier
    vehicle_id: Identifier
    mechanic_id: Identifier | None = None
    status_id: Identifier = DEFAULT_STATUS_ID
    problem_description: str | None = None
    diagnosis: str | None = None
    quotation_details: str | None = None
    total_amount: float = Field(default=0, ge=0)
    mechanic_commission: float = Field(default=0, ge=0)


class UpdateServiceInput(partial_model(CreateServiceInput, "ServicePatch")):
    started_at: DateValue | None = None
    completed_at: DateValue | None = None


class ServiceStatusChangeInput(SchemaModel):
    """Moves a service to another work status."""

    id: Identifier
    new_status_id: Identifier
    notes: str | None = None


class ServiceFilter(PaginationFilter):
    search: str | None = None
    client_id: Identifier | None = None
    vehicle_id: Identifier | None = None
    mechanic_id: Identifier | None = None
    status_id: Identifier | None = None
    date_from: DateValue | None = None
    date_to: DateValue | None = None


SERVICE_SCHEMAS = EntitySchemas(
    name="service",
    create=CreateServiceInput,
    update=UpdateServiceInput,
    filter=ServiceFilter,
)
