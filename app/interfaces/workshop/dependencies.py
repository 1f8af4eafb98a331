"""
Dependency injection for the workshop bounded context.

Repositories are created once per application in ``build_repositories``
and stored on ``app.state``. Routes receive them through FastAPI
dependencies so tests get a fresh store with every app instance.
"""

from collections.abc import Callable

from fastapi import Request

from app.domain.workshop.ports import RecordRepository
from app.infrastructure.workshop.memory_repository import InMemoryRecordRepository
from app.interfaces.workshop.resources import RESOURCES

STATUS_LOGS = "statuslog"
GENERAL_SETTINGS = "settings"


def build_repositories() -> dict[str, RecordRepository]:
    """Create one repository per resource plus status logs and settings."""
    names = [resource.name for resource in RESOURCES] + [STATUS_LOGS, GENERAL_SETTINGS]
    return {name: InMemoryRecordRepository(name) for name in names}


def repository_provider(name: str) -> Callable[[Request], RecordRepository]:
    """Return a dependency resolving the repository registered under ``name``."""

    def provide(request: Request) -> RecordRepository:
        return request.app.state.repositories[name]

    provide.__name__ = f"get_{name}_repository"
    return provide
