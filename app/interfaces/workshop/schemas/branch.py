"""Branch schemas.

A branch is one physical workshop of the chain. Its code is a short
uppercase identifier printed on documents and must be unique.
"""

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Email, Flag, Phone, text

BranchName = text(
    min_length=2,
    max_length=100,
    too_short="Nombre debe tener al menos 2 caracteres",
    too_long="Nombre no puede exceder 100 caracteres",
)
BranchCode = text(
    min_length=3,
    max_length=10,
    pattern=r"^[A-Z0-9]+$",
    too_short="Código debe tener al menos 3 caracteres",
    too_long="Código no puede exceder 10 caracteres",
    mismatch="Código debe contener solo letras mayúsculas y números",
)
BranchAddress = text(
    min_length=5,
    max_length=200,
    too_short="Dirección debe tener al menos 5 caracteres",
    too_long="Dirección no puede exceder 200 caracteres",
)
BranchPhone = text(
    Phone, max_length=20, too_long="Teléfono no puede exceder 20 caracteres"
)
City = text(
    min_length=2,
    max_length=50,
    too_short="Ciudad debe tener al menos 2 caracteres",
    too_long="Ciudad no puede exceder 50 caracteres",
)
BranchSearch = text(
    max_length=100, too_long="La búsqueda no puede exceder 100 caracteres"
)


class CreateBranchInput(SchemaModel):
    name: BranchName
    code: BranchCode
    address: BranchAddress
    phone: BranchPhone
    email: Email | None = None
    city: City
    is_active: bool = True


UpdateBranchInput = partial_model(CreateBranchInput, "UpdateBranchInput")


class BranchFilter(PaginationFilter):
    search: BranchSearch | None = None
    is_active: Flag | None = None


BRANCH_SCHEMAS = EntitySchemas(
    name="branch",
    create=CreateBranchInput,
    update=UpdateBranchInput,
    filter=BranchFilter,
)
