"""
Use case: move a service to another work status.

Input: ChangeServiceStatusCommand
Output: The updated service record.
Side effects: Appends an entry to the status log.
Failure cases: RecordNotFoundError for an unknown service.
"""

import logging

from app.application.workshop.dtos import ChangeServiceStatusCommand
from app.domain.workshop.entities import Record
from app.domain.workshop.errors import RecordNotFoundError
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)

SERVICE_NOT_FOUND = "Servicio no encontrado"


class ChangeServiceStatusUseCase:
    """Updates a service's status and records the transition."""

    def __init__(
        self, services: RecordRepository, status_logs: RecordRepository
    ) -> None:
        self._services = services
        self._status_logs = status_logs

    def execute(self, command: ChangeServiceStatusCommand) -> Record:
        service = self._services.get(command.service_id)
        if service is None:
            raise RecordNotFoundError(SERVICE_NOT_FOUND, command.service_id)

        old_status_id = service.get("statusId")
        updated = self._services.update(
            command.service_id, {"statusId": command.new_status_id}
        )
        if updated is None:
            raise RecordNotFoundError(SERVICE_NOT_FOUND, command.service_id)

        self._status_logs.add(
            {
                "serviceId": command.service_id,
                "oldStatusId": old_status_id,
                "newStatusId": command.new_status_id,
                "changedBy": command.changed_by,
                "notes": command.notes,
            }
        )
        logger.info(
            "Service id=%d moved from status %s to %d",
            command.service_id,
            old_status_id,
            command.new_status_id,
        )
        return updated
