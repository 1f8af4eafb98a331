"""
Schema registry.

Maps each entity name to its create, update and filter schemas.
Built once at import time; the schemas are stateless.
"""

from app.interfaces.workshop.schemas.appointment import APPOINTMENT_SCHEMAS
from app.interfaces.workshop.schemas.branch import BRANCH_SCHEMAS
from app.interfaces.workshop.schemas.client import CLIENT_SCHEMAS
from app.interfaces.workshop.schemas.mechanic import MECHANIC_SCHEMAS
from app.interfaces.workshop.schemas.opportunity import OPPORTUNITY_SCHEMAS
from app.interfaces.workshop.schemas.service import SERVICE_SCHEMAS
from app.interfaces.workshop.schemas.user import USER_SCHEMAS
from app.interfaces.workshop.schemas.vehicle import VEHICLE_SCHEMAS
from app.interfaces.workshop.schemas.workstatus import WORK_STATUS_SCHEMAS
from app.shared.validation import EntitySchemas

SCHEMA_REGISTRY: dict[str, EntitySchemas] = {
    schemas.name: schemas
    for schemas in (
        APPOINTMENT_SCHEMAS,
        BRANCH_SCHEMAS,
        CLIENT_SCHEMAS,
        MECHANIC_SCHEMAS,
        OPPORTUNITY_SCHEMAS,
        SERVICE_SCHEMAS,
        USER_SCHEMAS,
        VEHICLE_SCHEMAS,
        WORK_STATUS_SCHEMAS,
    )
}


def get_schemas(entity: str) -> EntitySchemas:
    """Return the schemas registered for an entity.

    Raises:
        KeyError: If no schemas are registered under that name.
    """
    return SCHEMA_REGISTRY[entity]
