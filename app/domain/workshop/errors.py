"""
Domain errors for the workshop bounded context.

Errors raised from the application layer are defined here and
turned into HTTP responses by the shared error normalizer.
No framework imports allowed.
"""

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class WorkshopError(Exception):
    """Base error carrying an HTTP status and an operational flag.

    Operational errors are expected, caller-facing failures such as a
    missing record. Anything else reaching the normalizer is treated
    as an unexpected crash.

    Attributes:
        message: Caller-facing message.
        status_code: HTTP status to respond with.
        is_operational: True when the failure is expected.
        kind: Discriminator used by the normalizer to classify errors.
    """

    kind = "application"

    def __init__(
        self,
        message: str = INTERNAL_ERROR_MESSAGE,
        status_code: int = 500,
        is_operational: bool = False,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.is_operational = is_operational
        super().__init__(self.message)


class RecordNotFoundError(WorkshopError):
    """Raised when a record id does not exist."""

    def __init__(self, message: str, record_id: int) -> None:
        super().__init__(message, status_code=404, is_operational=True)
        self.record_id = record_id


class DuplicateRecordError(WorkshopError):
    """Raised when a unique field value is already taken."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message, status_code=409, is_operational=True)
        self.field = field


def create_error(message: str, status_code: int = 500) -> WorkshopError:
    """Build an operational error from a message and a status code."""
    return WorkshopError(message, status_code=status_code, is_operational=True)
