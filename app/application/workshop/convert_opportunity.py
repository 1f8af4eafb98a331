"""
Use case: convert a sales opportunity into an appointment.

Input: ConvertOpportunityCommand
Output: The new appointment record.
Side effects: Marks the opportunity as converted.
Failure cases: RecordNotFoundError for an unknown opportunity,
400 for converted or declined opportunities and for a vehicle that
already has an appointment that day.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone

from app.application.workshop.dtos import ConvertOpportunityCommand
from app.domain.workshop.entities import Record, RecordQuery
from app.domain.workshop.errors import RecordNotFoundError, create_error
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)

OPPORTUNITY_NOT_FOUND = "Oportunidad no encontrada"
ALREADY_CONVERTED = "La oportunidad ya ha sido convertida"
DECLINED = "No se puede convertir una oportunidad rechazada"
VEHICLE_BOOKED = "Ya existe una cita para este vehículo en la fecha seleccionada"


def day_bounds(moment: datetime | date) -> tuple[datetime, datetime]:
    """Return the first and last instant of the UTC day holding ``moment``.

    Naive datetimes are read as UTC.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        day = moment.astimezone(timezone.utc).date()
    else:
        day = moment
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


class ConvertOpportunityUseCase:
    """Books an appointment from an opportunity and closes the opportunity."""

    def __init__(
        self, opportunities: RecordRepository, appointments: RecordRepository
    ) -> None:
        self._opportunities = opportunities
        self._appointments = appointments

    def execute(self, command: ConvertOpportunityCommand) -> Record:
        opportunity = self._opportunities.get(command.opportunity_id)
        if opportunity is None:
            raise RecordNotFoundError(OPPORTUNITY_NOT_FOUND, command.opportunity_id)
        if opportunity.get("status") == "converted":
            raise create_error(ALREADY_CONVERTED, 400)
        if opportunity.get("status") == "declined":
            raise create_error(DECLINED, 400)
        if self._vehicle_booked(opportunity["vehicleId"], command.scheduled_date):
            raise create_error(VEHICLE_BOOKED, 400)

        self._opportunities.update(command.opportunity_id, {"status": "converted"})
        appointment = self._appointments.add(
            {
                "clientId": opportunity["clientId"],
                "vehicleId": opportunity["vehicleId"],
                "opportunityId": command.opportunity_id,
                "scheduledDate": command.scheduled_date,
                "notes": command.notes
                or f"Cita generada desde oportunidad: {opportunity.get('description')}",
                "isFromOpportunity": True,
                "status": "scheduled",
            }
        )
        logger.info(
            "Opportunity id=%d converted to appointment id=%d",
            command.opportunity_id,
            appointment["id"],
        )
        return appointment

    def _vehicle_booked(self, vehicle_id: int, scheduled: datetime | date) -> bool:
        start, end = day_bounds(scheduled)
        same_day = self._appointments.find_all(
            RecordQuery(
                equals={"vehicleId": vehicle_id},
                date_field="scheduledDate",
                date_from=start,
                date_to=end,
            )
        )
        return any(record.get("status") != "cancelled" for record in same_day)
