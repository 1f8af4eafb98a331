"""Vehicle schemas."""

from datetime import date
from typing import Annotated

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

from app.shared.validation import (
    EntitySchemas,
    PaginationFilter,
    SchemaModel,
    partial_model,
)
from app.shared.validation.primitives import Identifier, NullableText, text

FIRST_MODEL_YEAR = 1900


def _check_year(value: int) -> int:
    # Next year's models are sold before the calendar turns
    if not FIRST_MODEL_YEAR <= value <= date.today().year + 1:
        raise PydanticCustomError("invalid_year", "Año inválido")
    return value


Plate = Annotated[
    text(min_length=1, too_short="La placa es requerida"),
    AfterValidator(str.upper),
]
Brand = text(min_length=1, too_short="La marca es requerida")
VehicleModel = text(min_length=1, too_short="El modelo es requerido")
ModelYear = Annotated[int, AfterValidator(_check_year)]


class CreateVehicleInput(SchemaModel):
    plate: Plate
    brand: Brand
    model: VehicleModel
    year: ModelYear | None = None
    color: NullableText = None
    fuel_type: NullableText = None
    transmission: NullableText = None
    engine_number: NullableText = None
    chassis_number: NullableText = None
    client_id: Identifier
    notes: NullableText = None


UpdateVehicleInput = partial_model(CreateVehicleInput, "UpdateVehicleInput")


class VehicleFilter(PaginationFilter):
    search: str | None = None
    client_id: Identifier | None = None
    brand: str | None = None


VEHICLE_SCHEMAS = EntitySchemas(
    name="vehicle",
    create=CreateVehicleInput,
    update=UpdateVehicleInput,
    filter=VehicleFilter,
)
