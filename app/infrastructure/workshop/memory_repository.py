"""
In-memory adapter for the RecordRepository port.

Keeps records in a dict guarded by a lock. Used by the API until a
database adapter is wired in, and by the tests.
"""

import itertools
import logging
import threading
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from typing import Any

from dateutil.parser import isoparse

from app.domain.workshop.entities import Record, RecordPage, RecordQuery
from app.domain.workshop.errors import DuplicateRecordError
from app.domain.workshop.ports import RecordRepository

logger = logging.getLogger(__name__)


def _as_utc(value: Any) -> datetime | None:
    """Normalize a stored or requested date to an aware UTC datetime."""
    if isinstance(value, str):
        try:
            value = isoparse(value)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return None


def _sort_key(field: str):
    def key(record: Record) -> tuple[bool, Any]:
        value = record.get(field)
        if isinstance(value, (datetime, date)):
            value = _as_utc(value)
        return (value is None, value)

    return key


class InMemoryRecordRepository(RecordRepository):
    """Thread-safe dict-backed record store for one entity.

    Unique fields are checked under the same lock as the write, so two
    concurrent requests cannot both store the same value.
    """

    def __init__(self, entity: str) -> None:
        self._entity = entity
        self._records: dict[int, Record] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(
        self, values: Record, unique_fields: Mapping[str, str] | None = None
    ) -> Record:
        now = datetime.now(timezone.utc)
        with self._lock:
            self._reject_duplicates(values, unique_fields)
            record_id = next(self._ids)
            record = {**values, "id": record_id, "createdAt": now, "updatedAt": now}
            self._records[record_id] = record
        logger.info("Created %s id=%d", self._entity, record_id)
        return dict(record)

    def get(self, record_id: int) -> Record | None:
        with self._lock:
            record = self._records.get(record_id)
        return dict(record) if record is not None else None

    def update(
        self,
        record_id: int,
        changes: Record,
        unique_fields: Mapping[str, str] | None = None,
    ) -> Record | None:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                return None
            self._reject_duplicates(changes, unique_fields, exclude_id=record_id)
            record.update(changes)
            record["updatedAt"] = datetime.now(timezone.utc)
            updated = dict(record)
        logger.info("Updated %s id=%d fields=%s", self._entity, record_id, sorted(changes))
        return updated

    def delete(self, record_id: int) -> bool:
        with self._lock:
            removed = self._records.pop(record_id, None)
        if removed is not None:
            logger.info("Deleted %s id=%d", self._entity, record_id)
        return removed is not None

    def find(self, query: RecordQuery) -> RecordPage:
        matches = self.find_all(query)
        window = matches[query.offset : query.offset + query.limit]
        return RecordPage(
            items=window, total=len(matches), page=query.page, limit=query.limit
        )

    def find_all(self, query: RecordQuery) -> list[Record]:
        with self._lock:
            records = [dict(record) for record in self._records.values()]

        matches = [record for record in records if self._matches(record, query)]
        sort_field = query.sort_by or "id"
        if not any(sort_field in record for record in matches):
            sort_field = "id"
        matches.sort(key=_sort_key(sort_field), reverse=query.descending)
        return matches

    def _reject_duplicates(
        self,
        values: Record,
        unique_fields: Mapping[str, str] | None,
        exclude_id: int | None = None,
    ) -> None:
        # Caller holds self._lock
        for field, message in (unique_fields or {}).items():
            value = values.get(field)
            if value is None:
                continue
            if any(
                record.get(field) == value
                for record_id, record in self._records.items()
                if record_id != exclude_id
            ):
                logger.warning(
                    "Duplicate %s rejected for field=%s", self._entity, field
                )
                raise DuplicateRecordError(message, field)

    @staticmethod
    def _matches(record: Record, query: RecordQuery) -> bool:
        for field, expected in query.equals.items():
            if record.get(field) != expected:
                return False

        if query.search:
            needle = query.search.lower()
            haystack = (record.get(field) for field in query.search_fields)
            if not any(
                value is not None and needle in str(value).lower()
                for value in haystack
            ):
                return False

        if query.date_field and (query.date_from or query.date_to):
            moment = _as_utc(record.get(query.date_field))
            if moment is None:
                return False
            lower = _as_utc(query.date_from)
            upper = _as_utc(query.date_to)
            if lower is not None and moment < lower:
                return False
            if upper is not None and moment > upper:
                return False

        return True
