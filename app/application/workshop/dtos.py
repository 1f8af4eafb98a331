"""
Data Transfer Objects for the workshop application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from app.domain.workshop.entities import Record


@dataclass(frozen=True)
class RecordMessages:
    """Caller-facing messages for one entity.

    Attributes:
        created: Sent after a successful create.
        updated: Sent after a successful update.
        deleted: Sent after a successful delete.
        not_found: Sent when an id does not exist.
    """

    created: str
    updated: str
    deleted: str
    not_found: str


@dataclass(frozen=True)
class CreateRecordCommand:
    """Input DTO for storing a validated record.

    Attributes:
        values: Validated values keyed by public field name.
        defaults: Values stored when the caller did not provide them.
    """

    values: Record
    defaults: Record = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateRecordCommand:
    """Input DTO for patching a record."""

    record_id: int
    changes: Record


@dataclass(frozen=True)
class ChangeServiceStatusCommand:
    """Input DTO for moving a service to another work status.

    Attributes:
        service_id: The service being moved.
        new_status_id: Target work status.
        notes: Optional comment stored in the status log.
        changed_by: User responsible for the change, when known.
    """

    service_id: int
    new_status_id: int
    notes: str | None = None
    changed_by: int | None = None


@dataclass(frozen=True)
class ReorderWorkStatusesCommand:
    """Input DTO for moving work statuses to new board positions.

    Attributes:
        status_orders: (status id, new order index) pairs.
    """

    status_orders: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class ConvertOpportunityCommand:
    """Input DTO for turning an opportunity into an appointment."""

    opportunity_id: int
    scheduled_date: datetime | date
    notes: str | None = None


@dataclass(frozen=True)
class CreatePhoneAppointmentCommand:
    """Input DTO for an appointment booked over the phone.

    Attributes:
        client_name: Name given by the caller.
        client_phone: Caller's number, also used to find an existing client.
        vehicle_description: Free text such as "Nissan Versa 2018".
        scheduled_date: Appointment date and time.
        notes: Optional notes. A default mentioning the vehicle is stored
            when absent.
    """

    client_name: str
    client_phone: str
    vehicle_description: str
    scheduled_date: datetime | date
    notes: str | None = None
