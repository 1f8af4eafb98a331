"""
Use case: book an appointment from a phone call.

Input: CreatePhoneAppointmentCommand
Output: The new appointment record.
Side effects: Creates the client and a placeholder vehicle when the
caller's phone number or vehicle is not on file. A longer name given
by a known caller replaces the stored one.
"""

import logging
import time

from app.application.workshop.dtos import CreatePhoneAppointmentCommand
from app.domain.workshop.entities import Record, RecordQuery
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)

UNKNOWN_BRAND = "N/A"
UNKNOWN_MODEL = "Modelo pendiente"


def split_vehicle_description(description: str) -> tuple[str, str]:
    """Split "Nissan Versa 2018" into ("Nissan", "Versa 2018")."""
    parts = description.split()
    brand = parts[0] if parts else UNKNOWN_BRAND
    model = " ".join(parts[1:]) or UNKNOWN_MODEL
    return brand, model


def _describes(vehicle: Record, description: str) -> bool:
    wanted = description.lower()
    words = wanted.split()
    existing = f"{vehicle.get('brand', '')} {vehicle.get('model', '')}".lower()
    brand = str(vehicle.get("brand") or "").lower()
    return bool(words and words[0] in existing) or bool(brand and brand in wanted)


class CreatePhoneAppointmentUseCase:
    """Finds or creates the caller and vehicle, then books the appointment."""

    def __init__(
        self,
        clients: RecordRepository,
        vehicles: RecordRepository,
        appointments: RecordRepository,
        vehicle_unique_fields: dict[str, str] | None = None,
    ) -> None:
        self._clients = clients
        self._vehicles = vehicles
        self._appointments = appointments
        self._vehicle_unique_fields = vehicle_unique_fields

    def execute(self, command: CreatePhoneAppointmentCommand) -> Record:
        client = self._client_for(command.client_name, command.client_phone)
        vehicle = self._vehicle_for(client["id"], command.vehicle_description)
        appointment = self._appointments.add(
            {
                "clientId": client["id"],
                "vehicleId": vehicle["id"],
                "scheduledDate": command.scheduled_date,
                "notes": command.notes
                or f"Cita telefónica - Vehículo: {command.vehicle_description}",
                "isFromOpportunity": False,
                "status": "scheduled",
            }
        )
        logger.info(
            "Phone appointment id=%d booked for client id=%d",
            appointment["id"],
            client["id"],
        )
        return appointment

    def _client_for(self, name: str, phone: str) -> Record:
        known = self._clients.find_all(
            RecordQuery(equals={"phone": phone}, descending=False)
        )
        if not known:
            return self._clients.add({"name": name, "phone": phone, "whatsapp": phone})

        client = known[0]
        stored_name = client.get("name") or ""
        if name != stored_name and len(name) > len(stored_name):
            client = self._clients.update(client["id"], {"name": name}) or client
        return client

    def _vehicle_for(self, client_id: int, description: str) -> Record:
        owned = self._vehicles.find_all(
            RecordQuery(equals={"clientId": client_id}, descending=False)
        )
        for vehicle in owned:
            if _describes(vehicle, description):
                return vehicle

        brand, model = split_vehicle_description(description.strip())
        return self._vehicles.add(
            {
                "plate": f"TEMP-{int(time.time() * 1000)}",
                "brand": brand,
                "model": model,
                "clientId": client_id,
                "notes": (
                    f"Cita telefónica - Descripción original: {description}. "
                    "Placa pendiente de capturar al llegar."
                ),
            },
            self._vehicle_unique_fields,
        )
