"""Status log filter. Log entries are written by the service status endpoint."""

from app.shared.validation import PaginationFilter
from app.shared.validation.primitives import DateValue, Identifier


class StatusLogFilter(PaginationFilter):
    service_id: Identifier | None = None
    old_status_id: Identifier | None = None
    new_status_id: Identifier | None = None
    changed_by: Identifier | None = None
    date_from: DateValue | None = None
    date_to: DateValue | None = None
