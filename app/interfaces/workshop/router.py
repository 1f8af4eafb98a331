"""
FastAPI routers for the workshop bounded context.

Every record resource gets the same five routes. Workflow routes that span
several resources sit beside them. Input is validated through the schema registry; a rejected record is answered with the
list of failing fields. Every other failure propagates to the shared
error handlers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from app.application.workshop.change_service_status import ChangeServiceStatusUseCase
from app.application.workshop.convert_opportunity import ConvertOpportunityUseCase
from app.application.workshop.create_phone_appointment import (
    CreatePhoneAppointmentUseCase,
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
    ListClientOpportunitiesUseCase,
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
from app.domain.workshop.ports import RecordRepository
from app.interfaces.workshop.dependencies import (
    GENERAL_SETTINGS,
    STATUS_LOGS,
    repository_provider,
)
from app.interfaces.workshop.resources import (
    APPOINTMENTS,
    BRANCHES,
    CLIENTS,
    OPPORTUNITIES,
    RESOURCES,
    SERVICES,
    VEHICLES,
    WORK_STATUSES,
    Resource,
)
from app.interfaces.workshop.responses import (
    ERROR_RESPONSES,
    RecordListResponse,
    RecordResponse,
)
from app.interfaces.workshop.schemas.appointment import PhoneAppointmentInput
from app.interfaces.workshop.schemas.opportunity import ConvertOpportunityInput
from app.interfaces.workshop.schemas.service import ServiceStatusChangeInput
from app.interfaces.workshop.schemas.settings import (
    GeneralSettingsInput,
    UpdateGeneralSettingsInput,
)
from app.interfaces.workshop.schemas.statuslog import StatusLogFilter
from app.interfaces.workshop.schemas.workstatus import ReorderWorkStatusesInput
from app.shared.errors.handlers import (
    INVALID_PATH_MESSAGE,
    INVALID_QUERY_MESSAGE,
    validation_failure,
)
from app.shared.validation import (
    PaginationFilter,
    SchemaModel,
    ValidationResult,
    validate,
)
from app.shared.validation.primitives import Identifier

# Filter fields that are not exact-match conditions
QUERY_CONTROL_FIELDS = frozenset(
    {"page", "limit", "sortBy", "sortOrder", "search", "dateFrom", "dateTo"}
)

SETTINGS_ID = 1
SETTINGS_MESSAGES = RecordMessages(
    created="Configuración guardada exitosamente",
    updated="Configuración actualizada exitosamente",
    deleted="Configuración eliminada exitosamente",
    not_found="Configuración no encontrada",
)
STATUS_CHANGED_MESSAGE = "Estado del servicio actualizado exitosamente"
PHONE_APPOINTMENT_MESSAGE = "Cita telefónica creada exitosamente"
CONVERTED_MESSAGE = "Oportunidad convertida en cita exitosamente"
REORDERED_MESSAGE = "Estados de trabajo reordenados exitosamente"
CLIENT_VEHICLES_MESSAGE = "Vehículos obtenidos exitosamente"


class RecordIdParams(SchemaModel):
    id: Identifier


class ClientIdParams(SchemaModel):
    client_id: Identifier


def _path_id(record_id: str) -> ValidationResult[RecordIdParams]:
    return validate(RecordIdParams, {"id": record_id})


def _client_id(client_id: str) -> ValidationResult[ClientIdParams]:
    return validate(ClientIdParams, {"clientId": client_id})


def build_query(
    filters: PaginationFilter,
    search_fields: tuple[str, ...],
    date_field: str | None,
) -> RecordQuery:
    """Translate a validated filter into a repository query."""
    values = filters.model_dump(by_alias=True, exclude_none=True)
    return RecordQuery(
        page=filters.page,
        limit=filters.limit,
        sort_by=filters.sort_by,
        descending=filters.sort_order == "desc",
        search=values.get("search"),
        search_fields=search_fields,
        equals={
            key: value
            for key, value in values.items()
            if key not in QUERY_CONTROL_FIELDS
        },
        date_field=date_field,
        date_from=values.get("dateFrom"),
        date_to=values.get("dateTo"),
    )


def _page_body(page: RecordPage) -> dict[str, Any]:
    return {
        "success": True,
        "data": page.items,
        "pagination": {
            "page": page.page,
            "limit": page.limit,
            "total": page.total,
            "pages": page.pages,
        },
    }


def build_record_router(resource: Resource) -> APIRouter:
    """Create the CRUD routes of one record resource."""
    router = APIRouter(prefix=f"/{resource.path}", tags=[resource.path])
    schemas = resource.schemas
    get_repository = repository_provider(resource.name)

    @router.post(
        "",
        status_code=201,
        response_model=None,
        responses={201: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary=f"Create a {resource.name}",
    )
    def create_record(
        payload: dict[str, Any] = Body(...),
        repository: RecordRepository = Depends(get_repository),
    ) -> dict[str, Any] | JSONResponse:
        result = schemas.validate_create(payload)
        if not result.ok:
            return validation_failure(result.errors)
        record = CreateRecordUseCase(
            repository, resource.messages, resource.unique_fields
        ).execute(
            CreateRecordCommand(values=result.data.to_record(), defaults=resource.defaults)
        )
        return {"success": True, "message": resource.messages.created, "data": record}

    @router.get(
        "",
        response_model=None,
        responses={200: {"model": RecordListResponse}, **ERROR_RESPONSES},
        summary=f"List {resource.path}",
    )
    def list_records(
        request: Request,
        repository: RecordRepository = Depends(get_repository),
    ) -> dict[str, Any] | JSONResponse:
        result = schemas.validate_filter(dict(request.query_params))
        if not result.ok:
            return validation_failure(result.errors, INVALID_QUERY_MESSAGE)
        query = build_query(result.data, resource.search_fields, resource.date_field)
        return _page_body(ListRecordsUseCase(repository).execute(query))

    @router.get(
        "/{record_id}",
        response_model=None,
        responses={200: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary=f"Get a {resource.name}",
    )
    def get_record(
        record_id: str,
        repository: RecordRepository = Depends(get_repository),
    ) -> dict[str, Any] | JSONResponse:
        params = _path_id(record_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        record = GetRecordUseCase(repository, resource.messages).execute(params.data.id)
        return {"success": True, "data": record}

    @router.put(
        "/{record_id}",
        response_model=None,
        responses={200: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary=f"Update a {resource.name}",
    )
    def update_record(
        record_id: str,
        payload: dict[str, Any] = Body(...),
        repository: RecordRepository = Depends(get_repository),
    ) -> dict[str, Any] | JSONResponse:
        params = _path_id(record_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        result = schemas.validate_update({**payload, "id": params.data.id})
        if not result.ok:
            return validation_failure(result.errors)
        record = UpdateRecordUseCase(
            repository, resource.messages, resource.unique_fields
        ).execute(UpdateRecordCommand(record_id=result.data.id, changes=result.data.changes()))
        return {"success": True, "message": resource.messages.updated, "data": record}

    @router.delete(
        "/{record_id}",
        response_model=None,
        responses=ERROR_RESPONSES,
        summary=f"Delete a {resource.name}",
    )
    def delete_record(
        record_id: str,
        repository: RecordRepository = Depends(get_repository),
    ) -> dict[str, Any] | JSONResponse:
        params = _path_id(record_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        DeleteRecordUseCase(repository, resource.messages).execute(params.data.id)
        return {"success": True, "message": resource.messages.deleted}

    return router


def build_service_status_router() -> APIRouter:
    """Routes for moving services between work statuses and reading the log."""
    router = APIRouter(tags=[SERVICES.path])
    get_services = repository_provider(SERVICES.name)
    get_status_logs = repository_provider(STATUS_LOGS)

    @router.post(
        f"/{SERVICES.path}/{{record_id}}/status",
        response_model=None,
        responses={200: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary="Change the work status of a service",
    )
    def change_service_status(
        record_id: str,
        payload: dict[str, Any] = Body(...),
        services: RecordRepository = Depends(get_services),
        status_logs: RecordRepository = Depends(get_status_logs),
    ) -> dict[str, Any] | JSONResponse:
        params = _path_id(record_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        result = validate(ServiceStatusChangeInput, {**payload, "id": params.data.id})
        if not result.ok:
            return validation_failure(result.errors)
        command = ChangeServiceStatusCommand(
            service_id=result.data.id,
            new_status_id=result.data.new_status_id,
            notes=result.data.notes,
        )
        service = ChangeServiceStatusUseCase(services, status_logs).execute(command)
        return {"success": True, "message": STATUS_CHANGED_MESSAGE, "data": service}

    @router.get(
        "/status-logs",
        response_model=None,
        responses={200: {"model": RecordListResponse}, **ERROR_RESPONSES},
        summary="List service status changes",
    )
    def list_status_logs(
        request: Request,
        status_logs: RecordRepository = Depends(get_status_logs),
    ) -> dict[str, Any] | JSONResponse:
        result = validate(StatusLogFilter, dict(request.query_params))
        if not result.ok:
            return validation_failure(result.errors, INVALID_QUERY_MESSAGE)
        query = build_query(result.data, search_fields=(), date_field="createdAt")
        return _page_body(ListRecordsUseCase(status_logs).execute(query))

    return router


def build_workflow_router() -> APIRouter:
    """Routes that span several resources or look records up by client.

    Registered ahead of the record routers so fixed segments such as
    ``/branches/active`` are matched before ``/branches/{record_id}``.
    """
    router = APIRouter()
    get_appointments = repository_provider(APPOINTMENTS.name)
    get_branches = repository_provider(BRANCHES.name)
    get_clients = repository_provider(CLIENTS.name)
    get_opportunities = repository_provider(OPPORTUNITIES.name)
    get_vehicles = repository_provider(VEHICLES.name)
    get_work_statuses = repository_provider(WORK_STATUSES.name)

    @router.post(
        f"/{APPOINTMENTS.path}/phone",
        status_code=201,
        response_model=None,
        responses={201: {"model": RecordResponse}, **ERROR_RESPONSES},
        tags=[APPOINTMENTS.path],
        summary="Book an appointment taken over the phone",
    )
    def create_phone_appointment(
        payload: dict[str, Any] = Body(...),
        clients: RecordRepository = Depends(get_clients),
        vehicles: RecordRepository = Depends(get_vehicles),
        appointments: RecordRepository = Depends(get_appointments),
    ) -> dict[str, Any] | JSONResponse:
        result = validate(PhoneAppointmentInput, payload)
        if not result.ok:
            return validation_failure(result.errors)
        command = CreatePhoneAppointmentCommand(
            client_name=result.data.client_name,
            client_phone=result.data.client_phone,
            vehicle_description=result.data.vehicle_description,
            scheduled_date=result.data.scheduled_date,
            notes=result.data.notes,
        )
        appointment = CreatePhoneAppointmentUseCase(
            clients, vehicles, appointments, VEHICLES.unique_fields
        ).execute(command)
        return {"success": True, "message": PHONE_APPOINTMENT_MESSAGE, "data": appointment}

    @router.post(
        f"/{OPPORTUNITIES.path}/{{record_id}}/convert-to-appointment",
        status_code=201,
        response_model=None,
        responses={201: {"model": RecordResponse}, **ERROR_RESPONSES},
        tags=[OPPORTUNITIES.path],
        summary="Convert an opportunity into an appointment",
    )
    def convert_opportunity(
        record_id: str,
        payload: dict[str, Any] = Body(...),
        opportunities: RecordRepository = Depends(get_opportunities),
        appointments: RecordRepository = Depends(get_appointments),
    ) -> dict[str, Any] | JSONResponse:
        params = _path_id(record_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        result = validate(ConvertOpportunityInput, payload)
        if not result.ok:
            return validation_failure(result.errors)
        command = ConvertOpportunityCommand(
            opportunity_id=params.data.id,
            scheduled_date=result.data.scheduled_date,
            notes=result.data.notes,
        )
        appointment = ConvertOpportunityUseCase(opportunities, appointments).execute(
            command
        )
        return {"success": True, "message": CONVERTED_MESSAGE, "data": appointment}

    @router.post(
        f"/{WORK_STATUSES.path}/reorder",
        response_model=None,
        responses=ERROR_RESPONSES,
        tags=[WORK_STATUSES.path],
        summary="Move work statuses to new board positions",
    )
    def reorder_work_statuses(
        payload: dict[str, Any] = Body(...),
        work_statuses: RecordRepository = Depends(get_work_statuses),
    ) -> dict[str, Any] | JSONResponse:
        result = validate(ReorderWorkStatusesInput, payload)
        if not result.ok:
            return validation_failure(result.errors)
        command = ReorderWorkStatusesCommand(
            status_orders=tuple(
                (item.id, item.order_index) for item in result.data.status_orders
            )
        )
        statuses = ReorderWorkStatusesUseCase(work_statuses).execute(command)
        return {"success": True, "message": REORDERED_MESSAGE, "data": statuses}

    @router.get(
        f"/{VEHICLES.path}/by-client/{{client_id}}",
        response_model=None,
        responses=ERROR_RESPONSES,
        tags=[VEHICLES.path],
        summary="List a client's vehicles",
    )
    def list_client_vehicles(
        client_id: str,
        vehicles: RecordRepository = Depends(get_vehicles),
    ) -> dict[str, Any] | JSONResponse:
        params = _client_id(client_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        found = ListClientVehiclesUseCase(vehicles).execute(params.data.client_id)
        return {
            "success": True,
            "message": CLIENT_VEHICLES_MESSAGE,
            "data": {"vehicles": found},
        }

    @router.get(
        f"/{OPPORTUNITIES.path}/by-client/{{client_id}}",
        response_model=None,
        responses=ERROR_RESPONSES,
        tags=[OPPORTUNITIES.path],
        summary="List a client's opportunities",
    )
    def list_client_opportunities(
        client_id: str,
        opportunities: RecordRepository = Depends(get_opportunities),
    ) -> dict[str, Any] | JSONResponse:
        params = _client_id(client_id)
        if not params.ok:
            return validation_failure(params.errors, INVALID_PATH_MESSAGE)
        found = ListClientOpportunitiesUseCase(opportunities).execute(
            params.data.client_id
        )
        return {"success": True, "data": found}

    @router.get(
        f"/{BRANCHES.path}/active",
        response_model=None,
        tags=[BRANCHES.path],
        summary="List active branches",
    )
    def list_active_branches(
        branches: RecordRepository = Depends(get_branches),
    ) -> dict[str, Any]:
        return {"success": True, "data": ListActiveBranchesUseCase(branches).execute()}

    return router


def build_settings_router() -> APIRouter:
    """Routes for the workshop's general settings, a single record."""
    router = APIRouter(prefix="/settings", tags=["settings"])
    get_settings_store = repository_provider(GENERAL_SETTINGS)

    @router.get(
        "",
        response_model=None,
        responses={200: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary="Get general settings",
    )
    def get_settings(
        store: RecordRepository = Depends(get_settings_store),
    ) -> dict[str, Any]:
        record = GetRecordUseCase(store, SETTINGS_MESSAGES).execute(SETTINGS_ID)
        return {"success": True, "data": record}

    @router.put(
        "",
        response_model=None,
        responses={200: {"model": RecordResponse}, **ERROR_RESPONSES},
        summary="Save general settings",
        description="The first save requires every field; later saves are partial.",
    )
    def save_settings(
        payload: dict[str, Any] = Body(...),
        store: RecordRepository = Depends(get_settings_store),
    ) -> dict[str, Any] | JSONResponse:
        if store.get(SETTINGS_ID) is None:
            result = validate(GeneralSettingsInput, payload)
            if not result.ok:
                return validation_failure(result.errors)
            record = CreateRecordUseCase(store, SETTINGS_MESSAGES).execute(
                CreateRecordCommand(values=result.data.to_record())
            )
            return {"success": True, "message": SETTINGS_MESSAGES.created, "data": record}

        patch = validate(UpdateGeneralSettingsInput, payload)
        if not patch.ok:
            return validation_failure(patch.errors)
        record = UpdateRecordUseCase(store, SETTINGS_MESSAGES).execute(
            UpdateRecordCommand(record_id=SETTINGS_ID, changes=patch.data.changes())
        )
        return {"success": True, "message": SETTINGS_MESSAGES.updated, "data": record}

    return router


router = APIRouter()
router.include_router(build_service_status_router())
router.include_router(build_workflow_router())
for _resource in RESOURCES:
    router.include_router(build_record_router(_resource))
router.include_router(build_settings_router())
