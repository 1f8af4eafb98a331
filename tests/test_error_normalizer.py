"""
Tests for the ErrorNormalizer.

The normalizer is exercised directly with the environment passed in,
so no process-wide setting is touched.
"""

import pytest
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from app.domain.workshop.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    WorkshopError,
    create_error,
)
from app.shared.errors.handlers import (
    DATABASE_KIND,
    GENERIC_KIND,
    VALIDATION_KIND,
    ErrorNormalizer,
    classify,
)


class _Strict(BaseModel):
    value: int


class _ClientKnownRequestError(Exception):
    """Stand-in for a database client that tags its own errors."""

    kind = "database"


def _raised(exc: Exception) -> Exception:
    """Return the exception with a traceback attached."""
    try:
        raise exc
    except Exception as caught:
        return caught


def _pydantic_error() -> ValidationError:
    with pytest.raises(ValidationError) as info:
        _Strict.model_validate({"value": "not a number"})
    return info.value


@pytest.fixture
def development() -> ErrorNormalizer:
    return ErrorNormalizer(environment="development")


@pytest.fixture
def production() -> ErrorNormalizer:
    return ErrorNormalizer(environment="production")


class TestClassify:
    """Tests for the error kind detection."""

    def test_sqlalchemy_errors(self) -> None:
        exc = IntegrityError("INSERT", {}, Exception("unique violation"))
        assert classify(exc) == DATABASE_KIND

    def test_tagged_database_errors(self) -> None:
        assert classify(_ClientKnownRequestError("P2002")) == DATABASE_KIND

    def test_validation_errors(self) -> None:
        assert classify(_pydantic_error()) == VALIDATION_KIND

    def test_everything_else(self) -> None:
        assert classify(RuntimeError("boom")) == GENERIC_KIND
        assert classify(create_error("x", 418)) == GENERIC_KIND


class TestDatabaseErrors:
    """Database failures never leak driver detail."""

    def test_development(self, development: ErrorNormalizer) -> None:
        exc = _raised(OperationalError("SELECT 1", {}, Exception("connection refused")))
        normalized = development.normalize(exc)
        assert normalized.status_code == 400
        assert normalized.body["success"] is False
        assert normalized.body["message"] == "Error en la base de datos"
        assert "stack" in normalized.body

    def test_production(self, production: ErrorNormalizer) -> None:
        exc = _raised(OperationalError("SELECT 1", {}, Exception("connection refused")))
        normalized = production.normalize(exc)
        assert normalized.status_code == 400
        assert normalized.body == {
            "success": False,
            "message": "Error en la base de datos",
        }

    def test_tagged_error(self, production: ErrorNormalizer) -> None:
        normalized = production.normalize(_ClientKnownRequestError("P2002 unique"))
        assert normalized.status_code == 400
        assert normalized.body["message"] == "Error en la base de datos"


class TestValidationErrors:
    """Validation failures get a generic 400."""

    def test_pydantic(self, production: ErrorNormalizer) -> None:
        normalized = production.normalize(_pydantic_error())
        assert normalized.status_code == 400
        assert normalized.body == {
            "success": False,
            "message": "Datos de entrada inválidos",
        }


class TestGenericErrors:
    """Errors keep their own status and message, except production 500s."""

    def test_production_hides_internal_message(
        self, production: ErrorNormalizer
    ) -> None:
        normalized = production.normalize(_raised(RuntimeError("secret detail")))
        assert normalized.status_code == 500
        assert normalized.body == {
            "success": False,
            "message": "Error interno del servidor",
        }

    def test_development_keeps_message_and_stack(
        self, development: ErrorNormalizer
    ) -> None:
        normalized = development.normalize(_raised(RuntimeError("boom")))
        assert normalized.status_code == 500
        assert normalized.body["message"] == "boom"
        assert "RuntimeError: boom" in normalized.body["stack"]

    def test_test_environment_has_no_stack(self) -> None:
        normalized = ErrorNormalizer(environment="test").normalize(
            _raised(RuntimeError("boom"))
        )
        assert normalized.body == {"success": False, "message": "boom"}

    def test_operational_status_kept_in_production(
        self, production: ErrorNormalizer
    ) -> None:
        normalized = production.normalize(create_error("x", 418))
        assert normalized.status_code == 418
        assert normalized.body == {"success": False, "message": "x"}

    def test_default_status_redacted_in_production(
        self, production: ErrorNormalizer
    ) -> None:
        normalized = production.normalize(create_error("detalle interno"))
        assert normalized.status_code == 500
        assert normalized.body["message"] == "Error interno del servidor"

    def test_empty_message_falls_back(self, development: ErrorNormalizer) -> None:
        normalized = development.normalize(_raised(Exception()))
        assert normalized.status_code == 500
        assert normalized.body["message"] == "Error interno del servidor"

    def test_domain_errors(self, production: ErrorNormalizer) -> None:
        not_found = production.normalize(RecordNotFoundError("Cliente no encontrado", 7))
        assert (not_found.status_code, not_found.body["message"]) == (
            404,
            "Cliente no encontrado",
        )
        duplicate = production.normalize(DuplicateRecordError("Ya existe", "code"))
        assert duplicate.status_code == 409

    def test_workshop_error_defaults(self) -> None:
        error = WorkshopError()
        assert error.status_code == 500
        assert error.is_operational is False
        assert create_error("x").is_operational is True


class TestLogging:
    """Server failures are logged with their traceback, client ones as warnings."""

    def test_server_error_logged(
        self, development: ErrorNormalizer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("ERROR", logger="app.shared.errors.handlers"):
            development.normalize(_raised(RuntimeError("boom")))
        assert any(record.exc_info for record in caplog.records)

    def test_client_error_logged_as_warning(
        self, production: ErrorNormalizer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING", logger="app.shared.errors.handlers"):
            production.normalize(create_error("Cliente no encontrado", 404))
        assert [record.levelname for record in caplog.records] == ["WARNING"]

    def test_operational_failure_logged_without_traceback(
        self, production: ErrorNormalizer, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Expected failures are warnings even at 500, with no traceback."""
        with caplog.at_level("WARNING", logger="app.shared.errors.handlers"):
            production.normalize(_raised(create_error("Servicio no disponible")))
        assert [record.levelname for record in caplog.records] == ["WARNING"]
        assert not any(record.exc_info for record in caplog.records)

    def test_non_operational_workshop_error_logged_as_error(
        self, production: ErrorNormalizer, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A 500 not marked operational keeps its traceback in the log."""
        with caplog.at_level("WARNING", logger="app.shared.errors.handlers"):
            production.normalize(_raised(WorkshopError("fallo interno")))
        assert [record.levelname for record in caplog.records] == ["ERROR"]
        assert caplog.records[0].exc_info
