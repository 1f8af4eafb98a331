"""General settings of the workshop: contact data, opening hours, locale."""

from app.shared.validation import PatchModel, SchemaModel, partial_model
from app.shared.validation.primitives import Name, OptionalUrl, RequiredEmail, text

Address = text(min_length=5, too_short="La dirección debe tener al menos 5 caracteres")
City = text(min_length=2, too_short="La ciudad es requerida")
State = text(min_length=2, too_short="El estado/provincia es requerido")
ContactPhone = text(
    min_length=10, too_short="El teléfono debe tener al menos 10 dígitos"
)


class WeekdayHours(SchemaModel):
    is_open: bool = True
    open_time: str = "08:00"
    close_time: str = "18:00"


class SaturdayHours(SchemaModel):
    is_open: bool = False
    open_time: str = "08:00"
    close_time: str = "14:00"


class SundayHours(SchemaModel):
    is_open: bool = False
    open_time: str = "09:00"
    close_time: str = "13:00"


class WorkingHours(SchemaModel):
    monday: WeekdayHours
    tuesday: WeekdayHours
    wednesday: WeekdayHours
    thursday: WeekdayHours
    friday: WeekdayHours
    saturday: SaturdayHours
    sunday: SundayHours


class GeneralSettingsInput(SchemaModel):
    name: Name
    description: str | None = None
    address: Address
    city: City
    state: State
    zip_code: str | None = None
    country: str = "México"

    phone: ContactPhone
    whatsapp: str | None = None
    email: RequiredEmail
    website: OptionalUrl | None = None

    working_hours: WorkingHours

    currency: str = "MXN"
    timezone: str = "America/Mexico_City"
    language: str = "es-MX"

    tax_id: str | None = None
    tax_regime: str | None = None

    logo_url: str | None = None


UpdateGeneralSettingsInput = partial_model(
    GeneralSettingsInput, "UpdateGeneralSettingsInput", base=PatchModel
)
