"""Admin catalog API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from capnio.database import get_db
from capnio.errors import CapnioError
from capnio.routes._errors import http_error
from capnio.schemas import (
    ControlDefinition,
    ControlDefinitionDraft,
    MachineTypeDraft,
    MachineTypeInfo,
    RegistryResponse,
    SensorTypeDraft,
    SensorTypeInfo,
    ZoneTypeDraft,
    ZoneTypeInfo,
)
from capnio.services import catalog_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


# --- Control definitions ---


@router.get("/controls", response_model=list[ControlDefinition])
async def list_controls(session: AsyncSession = Depends(get_db)) -> list[ControlDefinition]:
    return await catalog_service.list_control_definitions(session)


@router.get("/controls/{control_id}", response_model=ControlDefinition)
async def get_control(control_id: str, session: AsyncSession = Depends(get_db)) -> ControlDefinition:
    try:
        return await catalog_service.get_control_definition(session, control_id)
    except CapnioError as e:
        raise http_error(e) from e


@router.post("/controls", response_model=ControlDefinition, status_code=201)
async def create_control(
    body: ControlDefinitionDraft,
    session: AsyncSession = Depends(get_db),
) -> ControlDefinition:
    try:
        return await catalog_service.create_control_definition(session, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.put("/controls/{control_id}", response_model=ControlDefinition)
async def update_control(
    control_id: str,
    body: ControlDefinitionDraft,
    session: AsyncSession = Depends(get_db),
) -> ControlDefinition:
    try:
        return await catalog_service.update_control_definition(session, control_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/controls/{control_id}", status_code=204)
async def delete_control(control_id: str, session: AsyncSession = Depends(get_db)) -> None:
    """Delete a control definition and every machine configuration using it."""
    try:
        await catalog_service.delete_control_definition(session, control_id)
    except CapnioError as e:
        raise http_error(e) from e


# --- Sensor types ---


@router.get("/sensor-types", response_model=list[SensorTypeInfo])
async def list_sensor_types(session: AsyncSession = Depends(get_db)) -> list[SensorTypeInfo]:
    return await catalog_service.list_sensor_types(session)


@router.post("/sensor-types", response_model=SensorTypeInfo, status_code=201)
async def create_sensor_type(
    body: SensorTypeDraft,
    session: AsyncSession = Depends(get_db),
) -> SensorTypeInfo:
    try:
        return await catalog_service.create_sensor_type(session, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/sensor-types/{sensor_type_id}", status_code=204)
async def delete_sensor_type(sensor_type_id: str, session: AsyncSession = Depends(get_db)) -> None:
    try:
        await catalog_service.delete_sensor_type(session, sensor_type_id)
    except CapnioError as e:
        raise http_error(e) from e


# --- Machine types ---


@router.get("/machine-types", response_model=list[MachineTypeInfo])
async def list_machine_types(session: AsyncSession = Depends(get_db)) -> list[MachineTypeInfo]:
    return await catalog_service.list_machine_types(session)


@router.post("/machine-types", response_model=MachineTypeInfo, status_code=201)
async def create_machine_type(
    body: MachineTypeDraft,
    session: AsyncSession = Depends(get_db),
) -> MachineTypeInfo:
    try:
        return await catalog_service.create_machine_type(session, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/machine-types/{machine_type_id}", status_code=204)
async def delete_machine_type(machine_type_id: str, session: AsyncSession = Depends(get_db)) -> None:
    try:
        await catalog_service.delete_machine_type(session, machine_type_id)
    except CapnioError as e:
        raise http_error(e) from e


# --- Zone types ---


@router.get("/zone-types", response_model=list[ZoneTypeInfo])
async def list_zone_types(session: AsyncSession = Depends(get_db)) -> list[ZoneTypeInfo]:
    return await catalog_service.list_zone_types(session)


@router.post("/zone-types", response_model=ZoneTypeInfo, status_code=201)
async def create_zone_type(
    body: ZoneTypeDraft,
    session: AsyncSession = Depends(get_db),
) -> ZoneTypeInfo:
    try:
        return await catalog_service.create_zone_type(session, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/zone-types/{zone_type_id}", status_code=204)
async def delete_zone_type(zone_type_id: str, session: AsyncSession = Depends(get_db)) -> None:
    try:
        await catalog_service.delete_zone_type(session, zone_type_id)
    except CapnioError as e:
        raise http_error(e) from e


# --- Registry ---


@router.get("/system-variables", response_model=RegistryResponse)
async def list_system_variables() -> RegistryResponse:
    """Get the canonical system variables and general sensor categories."""
    return catalog_service.get_registry()
