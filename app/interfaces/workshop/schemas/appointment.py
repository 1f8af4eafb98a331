"""Appointment schemas."""

from typing import Annotated, Any, Literal

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import DateValue, Identifier, text

AppointmentStatus = Literal["scheduled", "confirmed", "completed", "cancelled"]


def _require_date_text(value: Any) -> Any:
    if value == "":
        raise PydanticCustomError("date_required", "Fecha y hora son requeridas")
    return value


ScheduledDate = Annotated[DateValue, BeforeValidator(_require_date_text)]
"""Appointment date and time. An empty string is reported as missing."""


class CreateAppointmentInput(SchemaModel):
    client_id: Identifier
    vehicle_id: Identifier
    opportunity_id: Identifier | None = None
    scheduled_date: DateValue
    notes: str | None = None
    is_from_opportunity: bool = False


class UpdateAppointmentInput(partial_model(CreateAppointmentInput, "AppointmentPatch")):
    status: AppointmentStatus | None = None


class AppointmentFilter(PaginationFilter):
    search: str | None = None
    client_id: Identifier | None = None
    vehicle_id: Identifier | None = None
    status: AppointmentStatus | None = None
    date_from: DateValue | None = None
    date_to: DateValue | None = None


class PhoneAppointmentInput(SchemaModel):
    """An appointment taken over the phone, before client and vehicle exist."""

    type: Literal["phone"]
    client_name: text(min_length=1, too_short="Nombre del cliente es requerido")
    client_phone: text(
        min_length=10, too_short="Teléfono debe tener al menos 10 dígitos"
    )
    vehicle_description: text(
        min_length=1, too_short="Descripción del vehículo es requerida"
    )
    scheduled_date: ScheduledDate
    notes: str | None = None


APPOINTMENT_SCHEMAS = EntitySchemas(
    name="appointment",
    create=CreateAppointmentInput,
    update=UpdateAppointmentInput,
    filter=AppointmentFilter,
)
