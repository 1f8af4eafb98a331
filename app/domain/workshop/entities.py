"""
Domain value objects for the workshop bounded context.

Plain frozen dataclasses. Records themselves are dictionaries.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

Record = dict[str, Any]


@dataclass(frozen=True)
class RecordQuery:
    """A filtered, sorted and paginated listing request.

    Attributes:
        page: 1-based page number.
        limit: Page size.
        sort_by: Field to sort on. Records are sorted by id when None.
        descending: Sort direction.
        search: Case-insensitive text matched against ``search_fields``.
        search_fields: Fields scanned by ``search``.
        equals: Exact-match filters keyed by field name.
        date_field: Field the date range applies to.
        date_from: Inclusive lower bound on ``date_field``.
        date_to: Inclusive upper bound on ``date_field``.
    """

    page: int = 1
    limit: int = 10
    sort_by: str | None = None
    descending: bool = True
    search: str | None = None
    search_fields: tuple[str, ...] = ()
    equals: dict[str, Any] = field(default_factory=dict)
    date_field: str | None = None
    date_from: datetime | date | None = None
    date_to: datetime | date | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class RecordPage:
    """One page of records plus the total number of matches."""

    items: list[Record]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
