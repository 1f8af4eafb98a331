"""Client schemas."""

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Email, Name, Phone


class CreateClientInput(SchemaModel):
    name: Name
    whatsapp: Phone
    phone: Phone | None = None
    email: Email | None = None
    address: str | None = None


UpdateClientInput = partial_model(CreateClientInput, "UpdateClientInput")


class ClientFilter(PaginationFilter):
    search: str | None = None


CLIENT_SCHEMAS = EntitySchemas(
    name="client",
    create=CreateClientInput,
    update=UpdateClientInput,
    filter=ClientFilter,
)
