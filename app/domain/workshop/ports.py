"""
Port interfaces (ABCs) for the workshop bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from app.domain.workshop.entities import Record, RecordPage, RecordQuery


class RecordRepository(ABC):
    """Port for storing and querying the records of one entity."""

    @abstractmethod
    def add(
        self, values: Record, unique_fields: Mapping[str, str] | None = None
    ) -> Record:
        """Store a new record, assigning its id and timestamps.

        unique_fields maps each field that must not repeat across records
        to the message of the DuplicateRecordError raised when it does.
        The check and the insert happen as one step.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: int) -> Record | None:
        """Return the record with this id, or None."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        record_id: int,
        changes: Record,
        unique_fields: Mapping[str, str] | None = None,
    ) -> Record | None:
        """Apply a partial patch. Returns None when the id is unknown.

        unique_fields is checked against every other record, as in add.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """Remove a record. Returns False when the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def find(self, query: RecordQuery) -> RecordPage:
        """Return one page of records matching the query."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, query: RecordQuery) -> list[Record]:
        """Return every record matching the query, sorted, without paging."""
        raise NotImplementedError
