"""User schemas. Passwords and sign-in are handled elsewhere."""

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Email, Flag, Identifier, Name, Phone


class CreateUserInput(SchemaModel):
    name: Name
    email: Email | None = None
    phone: Phone
    role_id: Identifier
    is_active: bool = True


UpdateUserInput = partial_model(CreateUserInput, "UpdateUserInput")


class UserFilter(PaginationFilter):
    search: str | None = None
    role_id: Identifier | None = None
    is_active: Flag | None = None


USER_SCHEMAS = EntitySchemas(
    name="user",
    create=CreateUserInput,
    update=UpdateUserInput,
    filter=UserFilter,
)
