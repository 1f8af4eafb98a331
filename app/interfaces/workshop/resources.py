"""
Record resources exposed over HTTP.

Each resource binds an entity's schemas to its URL segment, the
messages shown to users and the fields used for search and date
filtering.
"""

from dataclasses import dataclass, field
from typing import Any

from app.application.workshop.dtos import RecordMessages
from app.interfaces.workshop.schemas import get_schemas
from app.shared.validation import EntitySchemas


@dataclass(frozen=True)
class Resource:
    """HTTP configuration of one entity.

    Attributes:
        name: Registry key, also used to look up the repository.
        path: URL segment under ``/api/v1``.
        messages: Caller-facing messages for this entity.
        search_fields: Fields matched by the ``search`` query parameter.
        date_field: Field filtered by ``dateFrom``/``dateTo``.
        unique_fields: Unique fields mapped to their duplicate message.
        defaults: Values stored on create when the caller omits them.
    """

    name: str
    path: str
    messages: RecordMessages
    search_fields: tuple[str, ...]
    date_field: str | None = "createdAt"
    unique_fields: dict[str, str] = field(default_factory=dict)
    defaults: dict[str, Any] = field(default_factory=dict)

    @property
    def schemas(self) -> EntitySchemas:
        return get_schemas(self.name)


def _messages(singular: str, feminine: bool = False) -> RecordMessages:
    suffix = "a" if feminine else "o"
    return RecordMessages(
        created=f"{singular} cread{suffix} exitosamente",
        updated=f"{singular} actualizad{suffix} exitosamente",
        deleted=f"{singular} eliminad{suffix} exitosamente",
        not_found=f"{singular} no encontrad{suffix}",
    )


APPOINTMENTS = Resource(
    name="appointment",
    path="appointments",
    messages=_messages("Cita", feminine=True),
    search_fields=("notes", "status"),
    date_field="scheduledDate",
    defaults={"status": "scheduled"},
)
BRANCHES = Resource(
    name="branch",
    path="branches",
    messages=_messages("Sucursal", feminine=True),
    search_fields=("name", "code", "city", "address"),
    unique_fields={"code": "Ya existe una sucursal con ese código"},
)
CLIENTS = Resource(
    name="client",
    path="clients",
    messages=_messages("Cliente"),
    search_fields=("name", "whatsapp", "phone", "email"),
)
MECHANICS = Resource(
    name="mechanic",
    path="mechanics",
    messages=_messages("Mecánico"),
    search_fields=("name", "phone"),
)
OPPORTUNITIES = Resource(
    name="opportunity",
    path="opportunities",
    messages=_messages("Oportunidad", feminine=True),
    search_fields=("type", "description", "notes"),
    date_field="followUpDate",
)
SERVICES = Resource(
    name="service",
    path="services",
    messages=_messages("Servicio"),
    search_fields=("problemDescription", "diagnosis", "quotationDetails"),
)
USERS = Resource(
    name="user",
    path="users",
    messages=_messages("Usuario"),
    search_fields=("name", "email", "phone"),
)
VEHICLES = Resource(
    name="vehicle",
    path="vehicles",
    messages=_messages("Vehículo"),
    search_fields=("plate", "brand", "model"),
    unique_fields={"plate": "Ya existe un vehículo con esa placa"},
)
WORK_STATUSES = Resource(
    name="workstatus",
    path="work-statuses",
    messages=_messages("Estado de trabajo"),
    search_fields=("name",),
)

RESOURCES: tuple[Resource, ...] = (
    APPOINTMENTS,
    BRANCHES,
    CLIENTS,
    MECHANICS,
    OPPORTUNITIES,
    SERVICES,
    USERS,
    VEHICLES,
    WORK_STATUSES,
)
