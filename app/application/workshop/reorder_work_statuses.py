"""
Use case: move work statuses to new positions on the service board.

Input: ReorderWorkStatusesCommand
Output: The reordered statuses, sorted by their new order index.
Failure cases: 404 when any id is unknown or repeated,
400 when two statuses would share an order index.
"""

import logging

from app.application.workshop.dtos import ReorderWorkStatusesCommand
from app.domain.workshop.entities import Record
from app.domain.workshop.errors import create_error
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)

UNKNOWN_STATUS = "Uno o más estados de trabajo no existen"
DUPLICATE_ORDER = "Los índices de orden deben ser únicos"


class ReorderWorkStatusesUseCase:
    """Assigns new order indexes to a set of work statuses."""

    def __init__(self, work_statuses: RecordRepository) -> None:
        self._work_statuses = work_statuses

    def execute(self, command: ReorderWorkStatusesCommand) -> list[Record]:
        ids = [status_id for status_id, _ in command.status_orders]
        if len(set(ids)) != len(ids) or any(
            self._work_statuses.get(status_id) is None for status_id in ids
        ):
            raise create_error(UNKNOWN_STATUS, 404)

        indexes = [order_index for _, order_index in command.status_orders]
        if len(set(indexes)) != len(indexes):
            raise create_error(DUPLICATE_ORDER, 400)

        reordered = []
        for status_id, order_index in command.status_orders:
            updated = self._work_statuses.update(status_id, {"orderIndex": order_index})
            if updated is None:
                raise create_error(UNKNOWN_STATUS, 404)
            reordered.append(updated)

        logger.info("Reordered %d work statuses", len(reordered))
        return sorted(reordered, key=lambda status: status["orderIndex"])
