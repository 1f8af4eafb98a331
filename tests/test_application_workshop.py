"""
Tests for the workshop application layer (use cases) and the
in-memory repository adapter.

Use cases run against InMemoryRecordRepository or a mocked port.
No HTTP involved.
"""

import threading
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.application.workshop.change_service_status import ChangeServiceStatusUseCase
from app.application.workshop.convert_opportunity import (
    ConvertOpportunityUseCase,
    day_bounds,
)
from app.application.workshop.create_phone_appointment import (
    CreatePhoneAppointmentUseCase,
    split_vehicle_description,
)
from app.application.workshop.dtos import (
    ChangeServiceStatusCommand,
    ConvertOpportunityCommand,
    CreatePhoneAppointmentCommand,
    CreateRecordCommand,
    RecordMessages,
    ReorderWorkStatusesCommand,
    UpdateRecordCommand,
)
from app.application.workshop.lookups import (
    ListActiveBranchesUseCase,
    ListClientVehiclesUseCase,
)
from app.application.workshop.records import (
    CreateRecordUseCase,
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    UpdateRecordUseCase,
)
from app.application.workshop.reorder_work_statuses import ReorderWorkStatusesUseCase
from app.domain.workshop.entities import RecordPage, RecordQuery
from app.domain.workshop.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    WorkshopError,
)
from app.domain.workshop.ports import RecordRepository
from app.infrastructure.workshop.memory_repository import InMemoryRecordRepository

MESSAGES = RecordMessages(
    created="Sucursal creada exitosamente",
    updated="Sucursal actualizada exitosamente",
    deleted="Sucursal eliminada exitosamente",
    not_found="Sucursal no encontrada",
)
UNIQUE_CODE = {"code": "Ya existe una sucursal con ese código"}


@pytest.fixture
def repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository("branch")


class TestCreateRecordUseCase:
    """Tests for the CreateRecordUseCase."""

    def test_assigns_id_and_timestamps(self, repository) -> None:
        """Stored records get an id and matching created/updated times."""
        record = CreateRecordUseCase(repository, MESSAGES).execute(
            CreateRecordCommand(values={"code": "CTR01"})
        )
        assert record["id"] == 1
        assert record["createdAt"] == record["updatedAt"]
        assert record["createdAt"].tzinfo is not None

    def test_defaults_fill_absent_fields_only(self, repository) -> None:
        """A caller value wins over the default, even when falsy."""
        use_case = CreateRecordUseCase(repository, MESSAGES)
        defaulted = use_case.execute(
            CreateRecordCommand(values={}, defaults={"status": "scheduled"})
        )
        explicit = use_case.execute(
            CreateRecordCommand(values={"status": ""}, defaults={"status": "scheduled"})
        )
        assert defaulted["status"] == "scheduled"
        assert explicit["status"] == ""

    def test_duplicate_unique_field(self, repository) -> None:
        """A second record with the same code is rejected."""
        use_case = CreateRecordUseCase(repository, MESSAGES, UNIQUE_CODE)
        use_case.execute(CreateRecordCommand(values={"code": "CTR01"}))
        with pytest.raises(DuplicateRecordError) as info:
            use_case.execute(CreateRecordCommand(values={"code": "CTR01"}))
        assert info.value.status_code == 409
        assert info.value.field == "code"
        assert info.value.message == "Ya existe una sucursal con ese código"

    def test_unique_fields_passed_to_port(self) -> None:
        """The use case hands its unique fields to the port's write."""
        port = MagicMock(spec=RecordRepository)
        CreateRecordUseCase(port, MESSAGES, UNIQUE_CODE).execute(
            CreateRecordCommand(values={"code": "CTR01"})
        )
        port.add.assert_called_once_with({"code": "CTR01"}, UNIQUE_CODE)

    def test_concurrent_creates_store_one_record(self, repository) -> None:
        """Racing creates with the same code leave exactly one record."""
        workers = 8
        barrier = threading.Barrier(workers)
        use_case = CreateRecordUseCase(repository, MESSAGES, UNIQUE_CODE)
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def create() -> None:
            barrier.wait()
            try:
                use_case.execute(CreateRecordCommand(values={"code": "CTR01"}))
                outcome = "created"
            except DuplicateRecordError:
                outcome = "duplicate"
            with outcomes_lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=create) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(outcomes) == ["created"] + ["duplicate"] * (workers - 1)
        assert repository.find(RecordQuery()).total == 1


class TestReadUpdateDeleteUseCases:
    """Tests for GetRecordUseCase, UpdateRecordUseCase and DeleteRecordUseCase."""

    def test_get_unknown(self, repository) -> None:
        """Unknown ids raise the entity's not-found message."""
        with pytest.raises(RecordNotFoundError) as info:
            GetRecordUseCase(repository, MESSAGES).execute(5)
        assert info.value.message == "Sucursal no encontrada"
        assert info.value.record_id == 5
        assert info.value.is_operational is True

    def test_update_merges_changes(self, repository) -> None:
        """Only the patched fields change."""
        created = repository.add({"code": "CTR01", "city": "CDMX"})
        updated = UpdateRecordUseCase(repository, MESSAGES).execute(
            UpdateRecordCommand(record_id=created["id"], changes={"city": "Puebla"})
        )
        assert updated["code"] == "CTR01"
        assert updated["city"] == "Puebla"
        assert updated["updatedAt"] >= created["updatedAt"]

    def test_update_unique_ignores_self(self, repository) -> None:
        """A record may keep its own unique value but not take another's."""
        first = repository.add({"code": "CTR01"})
        repository.add({"code": "NTE02"})
        use_case = UpdateRecordUseCase(repository, MESSAGES, UNIQUE_CODE)
        use_case.execute(UpdateRecordCommand(record_id=first["id"], changes={"code": "CTR01"}))
        with pytest.raises(DuplicateRecordError):
            use_case.execute(
                UpdateRecordCommand(record_id=first["id"], changes={"code": "NTE02"})
            )

    def test_update_unknown(self, repository) -> None:
        with pytest.raises(RecordNotFoundError):
            UpdateRecordUseCase(repository, MESSAGES).execute(
                UpdateRecordCommand(record_id=9, changes={"city": "León"})
            )

    def test_delete(self, repository) -> None:
        """Deleting twice fails the second time."""
        created = repository.add({"code": "CTR01"})
        use_case = DeleteRecordUseCase(repository, MESSAGES)
        use_case.execute(created["id"])
        assert repository.get(created["id"]) is None
        with pytest.raises(RecordNotFoundError):
            use_case.execute(created["id"])

    def test_returned_records_are_copies(self, repository) -> None:
        """Mutating a returned record does not touch the store."""
        created = repository.add({"code": "CTR01"})
        created["code"] = "XXX"
        assert repository.get(created["id"])["code"] == "CTR01"


class TestListRecordsUseCase:
    """Tests for the ListRecordsUseCase against the in-memory adapter."""

    def test_pages(self, repository) -> None:
        """Total counts every match, items only the requested window."""
        for index in range(5):
            repository.add({"code": f"B{index}"})
        page = ListRecordsUseCase(repository).execute(
            RecordQuery(page=2, limit=2, descending=False)
        )
        assert isinstance(page, RecordPage)
        assert [record["code"] for record in page.items] == ["B2", "B3"]
        assert (page.total, page.pages) == (5, 3)

    def test_page_past_the_end(self, repository) -> None:
        repository.add({"code": "B0"})
        page = ListRecordsUseCase(repository).execute(RecordQuery(page=4, limit=10))
        assert page.items == []
        assert page.total == 1

    def test_unknown_sort_field_falls_back_to_id(self, repository) -> None:
        for code in ("B", "A"):
            repository.add({"code": code})
        page = ListRecordsUseCase(repository).execute(
            RecordQuery(sort_by="nonexistent", descending=False)
        )
        assert [record["id"] for record in page.items] == [1, 2]

    def test_missing_values_sort_last(self, repository) -> None:
        repository.add({"code": "B", "city": "Puebla"})
        repository.add({"code": "A"})
        repository.add({"code": "C", "city": "CDMX"})
        page = ListRecordsUseCase(repository).execute(
            RecordQuery(sort_by="city", descending=False)
        )
        assert [record["code"] for record in page.items] == ["C", "B", "A"]

    def test_equals_and_search(self, repository) -> None:
        repository.add({"code": "CTR01", "city": "CDMX", "isActive": True})
        repository.add({"code": "CTR02", "city": "Puebla", "isActive": True})
        repository.add({"code": "NTE01", "city": "cdmx norte", "isActive": False})
        page = ListRecordsUseCase(repository).execute(
            RecordQuery(
                search="cdmx",
                search_fields=("city",),
                equals={"isActive": True},
            )
        )
        assert [record["code"] for record in page.items] == ["CTR01"]

    def test_date_range_mixes_naive_aware_and_strings(self, repository) -> None:
        """Stored values of any date shape compare against aware bounds."""
        repository.add({"code": "A", "followUpDate": "2024-06-01"})
        repository.add({"code": "B", "followUpDate": datetime(2024, 6, 15, 12, 0)})
        repository.add(
            {"code": "C", "followUpDate": datetime(2024, 7, 1, tzinfo=timezone.utc)}
        )
        repository.add({"code": "D", "followUpDate": None})
        page = ListRecordsUseCase(repository).execute(
            RecordQuery(
                descending=False,
                date_field="followUpDate",
                date_from=date(2024, 6, 1),
                date_to=datetime(2024, 6, 30, 23, 59, tzinfo=timezone.utc),
            )
        )
        assert [record["code"] for record in page.items] == ["A", "B"]


class TestChangeServiceStatusUseCase:
    """Tests for the ChangeServiceStatusUseCase."""

    def test_moves_service_and_logs(self) -> None:
        """The new status is stored and the transition is appended to the log."""
        services = InMemoryRecordRepository("service")
        status_logs = InMemoryRecordRepository("statuslog")
        service = services.add({"clientId": 1, "vehicleId": 1, "statusId": 1})

        updated = ChangeServiceStatusUseCase(services, status_logs).execute(
            ChangeServiceStatusCommand(
                service_id=service["id"], new_status_id=4, notes="Entregado", changed_by=7
            )
        )

        assert updated["statusId"] == 4
        entries = status_logs.find(RecordQuery()).items
        assert len(entries) == 1
        assert {
            key: entries[0][key]
            for key in ("serviceId", "oldStatusId", "newStatusId", "changedBy", "notes")
        } == {
            "serviceId": service["id"],
            "oldStatusId": 1,
            "newStatusId": 4,
            "changedBy": 7,
            "notes": "Entregado",
        }

    def test_unknown_service_writes_nothing(self) -> None:
        """No log entry is written for a missing service."""
        status_logs = MagicMock(spec=RecordRepository)
        services = MagicMock(spec=RecordRepository)
        services.get.return_value = None
        with pytest.raises(RecordNotFoundError) as info:
            ChangeServiceStatusUseCase(services, status_logs).execute(
                ChangeServiceStatusCommand(service_id=3, new_status_id=2)
            )
        assert info.value.message == "Servicio no encontrado"
        status_logs.add.assert_not_called()


class TestFindAll:
    """Tests for the unpaginated listing of the in-memory adapter."""

    def test_returns_every_match_sorted(self, repository) -> None:
        for index in range(15):
            repository.add({"code": f"B{index:02d}", "city": "CDMX"})
        repository.add({"code": "X", "city": "Puebla"})
        records = repository.find_all(
            RecordQuery(equals={"city": "CDMX"}, sort_by="code", descending=False)
        )
        assert len(records) == 15
        assert records[0]["code"] == "B00"
        assert records[-1]["code"] == "B14"


class TestReorderWorkStatusesUseCase:
    """Tests for the ReorderWorkStatusesUseCase."""

    @pytest.fixture
    def statuses(self) -> InMemoryRecordRepository:
        statuses = InMemoryRecordRepository("workstatus")
        for index in (1, 2, 3):
            statuses.add({"name": f"Estado {index}", "orderIndex": index})
        return statuses

    def test_returns_statuses_by_new_index(self, statuses) -> None:
        reordered = ReorderWorkStatusesUseCase(statuses).execute(
            ReorderWorkStatusesCommand(status_orders=((1, 3), (2, 1), (3, 2)))
        )
        assert [status["id"] for status in reordered] == [2, 3, 1]
        assert statuses.get(1)["orderIndex"] == 3

    def test_unknown_or_repeated_id_is_404(self, statuses) -> None:
        """Nothing is written when an id is missing or listed twice."""
        use_case = ReorderWorkStatusesUseCase(statuses)
        for orders in (((1, 2), (7, 1)), ((1, 2), (1, 3))):
            with pytest.raises(WorkshopError) as info:
                use_case.execute(ReorderWorkStatusesCommand(status_orders=orders))
            assert info.value.status_code == 404
        assert statuses.get(1)["orderIndex"] == 1

    def test_repeated_index_is_400(self, statuses) -> None:
        with pytest.raises(WorkshopError) as info:
            ReorderWorkStatusesUseCase(statuses).execute(
                ReorderWorkStatusesCommand(status_orders=((1, 2), (2, 2)))
            )
        assert info.value.status_code == 400
        assert info.value.message == "Los índices de orden deben ser únicos"


class TestConvertOpportunityUseCase:
    """Tests for the ConvertOpportunityUseCase."""

    @pytest.fixture
    def stores(self) -> tuple[InMemoryRecordRepository, InMemoryRecordRepository]:
        opportunities = InMemoryRecordRepository("opportunity")
        opportunities.add(
            {
                "clientId": 1,
                "vehicleId": 5,
                "description": "Cambio de balatas",
                "status": "pending",
            }
        )
        return opportunities, InMemoryRecordRepository("appointment")

    def test_cancelled_appointment_does_not_block(self, stores) -> None:
        """Only non-cancelled appointments on the same day conflict."""
        opportunities, appointments = stores
        appointments.add(
            {
                "vehicleId": 5,
                "scheduledDate": datetime(2024, 6, 3, 8, 0, tzinfo=timezone.utc),
                "status": "cancelled",
            }
        )
        appointments.add(
            {
                "vehicleId": 5,
                "scheduledDate": datetime(2024, 6, 4, 8, 0, tzinfo=timezone.utc),
                "status": "scheduled",
            }
        )
        appointment = ConvertOpportunityUseCase(opportunities, appointments).execute(
            ConvertOpportunityCommand(
                opportunity_id=1,
                scheduled_date=datetime(2024, 6, 3, 17, 0, tzinfo=timezone.utc),
                notes="Traer factura",
            )
        )
        assert appointment["notes"] == "Traer factura"
        assert appointment["vehicleId"] == 5
        assert opportunities.get(1)["status"] == "converted"

    def test_conflict_leaves_opportunity_open(self, stores) -> None:
        opportunities, appointments = stores
        appointments.add(
            {"vehicleId": 5, "scheduledDate": "2024-06-03T23:30:00Z", "status": "confirmed"}
        )
        with pytest.raises(WorkshopError) as info:
            ConvertOpportunityUseCase(opportunities, appointments).execute(
                ConvertOpportunityCommand(
                    opportunity_id=1, scheduled_date=datetime(2024, 6, 3, 0, 5)
                )
            )
        assert info.value.status_code == 400
        assert opportunities.get(1)["status"] == "pending"

    def test_unknown_opportunity(self, stores) -> None:
        opportunities, appointments = stores
        with pytest.raises(RecordNotFoundError):
            ConvertOpportunityUseCase(opportunities, appointments).execute(
                ConvertOpportunityCommand(opportunity_id=9, scheduled_date=date(2024, 6, 3))
            )

    def test_day_bounds(self) -> None:
        """Naive datetimes are UTC; aware ones are moved to their UTC day."""
        start, end = day_bounds(datetime(2024, 6, 3, 22, 0))
        assert start == datetime(2024, 6, 3, tzinfo=timezone.utc)
        assert end == datetime(2024, 6, 3, 23, 59, 59, 999999, tzinfo=timezone.utc)
        start, _ = day_bounds(datetime.fromisoformat("2024-06-03T22:00:00-06:00"))
        assert start == datetime(2024, 6, 4, tzinfo=timezone.utc)


class TestCreatePhoneAppointmentUseCase:
    """Tests for the CreatePhoneAppointmentUseCase."""

    @pytest.fixture
    def stores(self) -> dict[str, InMemoryRecordRepository]:
        return {
            name: InMemoryRecordRepository(name)
            for name in ("client", "vehicle", "appointment")
        }

    def _book(self, stores, description: str, name: str = "Pedro") -> dict:
        return CreatePhoneAppointmentUseCase(
            stores["client"], stores["vehicle"], stores["appointment"]
        ).execute(
            CreatePhoneAppointmentCommand(
                client_name=name,
                client_phone="5598765432",
                vehicle_description=description,
                scheduled_date=datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc),
            )
        )

    def test_shorter_name_does_not_replace(self, stores) -> None:
        stores["client"].add({"name": "Pedro Ruiz", "phone": "5598765432"})
        appointment = self._book(stores, "Mazda 3")
        assert appointment["clientId"] == 1
        assert stores["client"].get(1)["name"] == "Pedro Ruiz"

    def test_matches_vehicle_by_brand(self, stores) -> None:
        """An owned vehicle whose brand appears in the description is reused."""
        client = stores["client"].add({"name": "Pedro", "phone": "5598765432"})
        stores["vehicle"].add(
            {"plate": "ABC123", "brand": "Mazda", "model": "3", "clientId": client["id"]}
        )
        appointment = self._book(stores, "mazda tres hatchback")
        assert appointment["vehicleId"] == 1
        assert stores["vehicle"].find(RecordQuery()).total == 1

    def test_new_vehicle_notes(self, stores) -> None:
        appointment = self._book(stores, "Ford")
        vehicle = stores["vehicle"].get(appointment["vehicleId"])
        assert (vehicle["brand"], vehicle["model"]) == ("Ford", "Modelo pendiente")
        assert vehicle["notes"] == (
            "Cita telefónica - Descripción original: Ford. "
            "Placa pendiente de capturar al llegar."
        )

    def test_split_vehicle_description(self) -> None:
        assert split_vehicle_description("Nissan Versa 2018") == ("Nissan", "Versa 2018")
        assert split_vehicle_description("") == ("N/A", "Modelo pendiente")


class TestLookupUseCases:
    """Tests for the client and branch lookups."""

    def test_client_vehicles_newest_first(self) -> None:
        vehicles = InMemoryRecordRepository("vehicle")
        for plate in ("A1", "B2", "C3"):
            vehicles.add({"plate": plate, "clientId": 1})
        vehicles.add({"plate": "Z9", "clientId": 2})
        found = ListClientVehiclesUseCase(vehicles).execute(1)
        assert {vehicle["plate"] for vehicle in found} == {"A1", "B2", "C3"}
        created = [vehicle["createdAt"] for vehicle in found]
        assert created == sorted(created, reverse=True)

    def test_active_branches_projection(self) -> None:
        branches = InMemoryRecordRepository("branch")
        branches.add(
            {"name": "Sur", "code": "SUR01", "city": "Puebla", "isActive": True, "phone": "1"}
        )
        branches.add({"name": "Este", "code": "EST01", "city": "CDMX", "isActive": False})
        assert ListActiveBranchesUseCase(branches).execute() == [
            {"id": 1, "name": "Sur", "code": "SUR01", "city": "Puebla"}
        ]
