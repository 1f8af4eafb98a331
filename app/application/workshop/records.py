"""
Use cases: create, read, update, delete and list records of one entity.

Input: validated records and patches, RecordQuery for listings.
Output: stored records and RecordPage.
Failure cases: RecordNotFoundError, DuplicateRecordError.
"""

import logging

from app.application.workshop.dtos import (
    CreateRecordCommand,
    RecordMessages,
    UpdateRecordCommand,
)
from app.domain.workshop.entities import Record, RecordPage, RecordQuery
from app.domain.workshop.errors import RecordNotFoundError
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)


class _RecordUseCase:
    def __init__(
        self,
        repository: RecordRepository,
        messages: RecordMessages,
        unique_fields: dict[str, str] | None = None,
    ) -> None:
        self._repository = repository
        self._messages = messages
        self._unique_fields = unique_fields or {}

    def _require(self, record_id: int) -> Record:
        record = self._repository.get(record_id)
        if record is None:
            raise RecordNotFoundError(self._messages.not_found, record_id)
        return record


class CreateRecordUseCase(_RecordUseCase):
    """Store a validated record. The store rejects repeated unique values."""

    def execute(self, command: CreateRecordCommand) -> Record:
        values = {**command.defaults, **command.values}
        return self._repository.add(values, self._unique_fields)


class GetRecordUseCase(_RecordUseCase):
    """Fetch one record by id."""

    def execute(self, record_id: int) -> Record:
        return self._require(record_id)


class UpdateRecordUseCase(_RecordUseCase):
    """Apply a partial patch to an existing record."""

    def execute(self, command: UpdateRecordCommand) -> Record:
        self._require(command.record_id)
        updated = self._repository.update(
            command.record_id, command.changes, self._unique_fields
        )
        if updated is None:
            raise RecordNotFoundError(self._messages.not_found, command.record_id)
        return updated


class DeleteRecordUseCase(_RecordUseCase):
    """Remove a record by id."""

    def execute(self, record_id: int) -> None:
        if not self._repository.delete(record_id):
            raise RecordNotFoundError(self._messages.not_found, record_id)


class ListRecordsUseCase:
    """Return one page of records matching a query."""

    def __init__(self, repository: RecordRepository) -> None:
        self._repository = repository

    def execute(self, query: RecordQuery) -> RecordPage:
        logger.debug(
            "Listing page=%d limit=%d sort_by=%s", query.page, query.limit, query.sort_by
        )
        return self._repository.find(query)
