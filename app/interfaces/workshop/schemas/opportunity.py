"""Sales opportunity schemas.

An opportunity is a follow-up sale suggested to a client for one of
their vehicles, usually after a service.
"""

from typing import Literal

from app.interfaces.workshop.schemas.appointment import ScheduledDate
from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import DateValue, Identifier, text

OpportunityStatus = Literal["pending", "contacted", "interested", "declined", "converted"]

OpportunityType = text(min_length=2, too_short="El tipo debe tener al menos 2 caracteres")
Description = text(
    min_length=5, too_short="La descripción debe tener al menos 5 caracteres"
)
FollowUpDate = text(min_length=1, too_short="Fecha de seguimiento requerida")


class CreateOpportunityInput(SchemaModel):
    client_id: Identifier
    vehicle_id: Identifier
    service_id: Identifier | None = None
    type: OpportunityType
    description: Description
    follow_up_date: FollowUpDate
    status: OpportunityStatus = "pending"
    notes: str | None = None


UpdateOpportunityInput = partial_model(CreateOpportunityInput, "UpdateOpportunityInput")


class ConvertOpportunityInput(SchemaModel):
    """Date and optional notes of the appointment an opportunity becomes."""

    scheduled_date: ScheduledDate
    notes: str | None = None


class OpportunityFilter(PaginationFilter):
    search: str | None = None
    client_id: Identifier | None = None
    vehicle_id: Identifier | None = None
    service_id: Identifier | None = None
    type: str | None = None
    status: OpportunityStatus | None = None
    date_from: DateValue | None = None
    date_to: DateValue | None = None


OPPORTUNITY_SCHEMAS = EntitySchemas(
    name="opportunity",
    create=CreateOpportunityInput,
    update=UpdateOpportunityInput,
    filter=OpportunityFilter,
)
