"""Admin catalog — control definitions, sensor/machine/zone types and the variable registry."""

import logging
import re
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from capnio import models
from capnio.core.formula import check_definition
from capnio.errors import AssetNotFound, DuplicateCatalogEntry, InvalidDefinition
from capnio.schemas import (
    ControlDefinition,
    ControlDefinitionDraft,
    MachineTypeDraft,
    MachineTypeInfo,
    RegistryResponse,
    SensorCategoryInfo,
    SensorTypeDraft,
    SensorTypeInfo,
    SystemVariableInfo,
    ZoneTypeDraft,
    ZoneTypeInfo,
)
from capnio.services._registry import (
    SENSOR_CATEGORY_REGISTRY,
    SYSTEM_VARIABLE_REGISTRY,
    get_system_variable,
    is_sensor_category,
)
from capnio.services.control_service import reconcile_configurations
from capnio.services.repository import (
    SqlAssetRepository,
    control_definition_from_row,
    control_definition_to_row,
)

logger = logging.getLogger(__name__)


def new_id(prefix: str, name: str | None = None) -> str:
    """Readable id from a name, with a short random suffix."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")[:40]
    suffix = uuid.uuid4().hex[:6]
    return f"{prefix}-{slug}-{suffix}" if slug else f"{prefix}-{suffix}"


async def _next_position(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.coalesce(func.max(model.position), -1)))
    return int(result.scalar_one()) + 1


async def _ensure_unique_name(session: AsyncSession, model, name: str, kind: str) -> None:
    query = select(model.id).where(func.lower(model.name) == name.strip().lower())
    if (await session.execute(query)).first() is not None:
        raise DuplicateCatalogEntry(kind, name)


# --- Control definitions ---


async def list_control_definitions(session: AsyncSession) -> list[ControlDefinition]:
    return await SqlAssetRepository(session).list_control_definitions()


async def get_control_definition(session: AsyncSession, control_id: str) -> ControlDefinition:
    return await SqlAssetRepository(session).get_control_definition(control_id)


async def create_control_definition(
    session: AsyncSession, draft: ControlDefinitionDraft
) -> ControlDefinition:
    definition = ControlDefinition.model_validate(
        {**draft.model_dump(), "id": draft.id or new_id("control", draft.name)}
    )
    problems = check_definition(definition)
    if problems:
        raise InvalidDefinition(problems)
    if await session.get(models.ControlDefinition, definition.id) is not None:
        raise DuplicateCatalogEntry("control", definition.id)

    row = control_definition_to_row(definition)
    row.position = await _next_position(session, models.ControlDefinition)
    session.add(row)
    await session.commit()
    logger.info("Created control definition %s (%s)", definition.id, definition.name)
    return definition


async def update_control_definition(
    session: AsyncSession, control_id: str, draft: ControlDefinitionDraft
) -> ControlDefinition:
    row = await session.get(models.ControlDefinition, control_id)
    if row is None:
        raise AssetNotFound(control_id, "control")
    definition = ControlDefinition.model_validate({**draft.model_dump(), "id": control_id})
    problems = check_definition(definition)
    if problems:
        raise InvalidDefinition(problems)

    control_definition_to_row(definition, row)
    deactivated = await reconcile_configurations(session, definition)
    await session.commit()
    logger.info(
        "Updated control definition %s (%d machine configurations switched off)",
        control_id,
        len(deactivated),
    )
    return control_definition_from_row(row)


async def delete_control_definition(session: AsyncSession, control_id: str) -> None:
    """Delete a definition along with every machine configuration and alert using it."""
    row = await session.get(models.ControlDefinition, control_id)
    if row is None:
        raise AssetNotFound(control_id, "control")
    await session.execute(
        delete(models.ConfiguredControl).where(models.ConfiguredControl.control_id == control_id)
    )
    await session.execute(
        delete(models.MachineAlert).where(models.MachineAlert.control_id == control_id)
    )
    await session.delete(row)
    await session.commit()
    logger.info("Deleted control definition %s", control_id)


# --- Sensor types ---


def mapped_variables_of(key_mappings: dict[str, str]) -> list[str]:
    """Distinct variables fed by a sensor type's payload keys, in key order."""
    seen: list[str] = []
    for variable in key_mappings.values():
        if variable and variable not in seen:
            seen.append(variable)
    return seen


def check_sensor_type(draft: SensorTypeDraft) -> list[str]:
    problems = [
        f"unknown sensor category: {category}"
        for category in draft.categories
        if not is_sensor_category(category)
    ]
    for key, variable in draft.key_mappings.items():
        if not key.strip():
            problems.append("payload keys must not be blank")
        if variable and get_system_variable(variable) is None:
            problems.append(f"key {key!r} maps to unknown system variable {variable!r}")
    return problems


def sensor_type_from_row(row: models.SensorType) -> SensorTypeInfo:
    return SensorTypeInfo(
        id=row.id,
        name=row.name,
        categories=list(row.categories),
        key_mappings=dict(row.key_mappings),
        description=row.description,
        example_payload=row.example_payload,
        provides=mapped_variables_of(row.key_mappings),
    )


def sensor_type_to_row(sensor_type: SensorTypeInfo) -> models.SensorType:
    return models.SensorType(
        id=sensor_type.id,
        name=sensor_type.name,
        categories=list(sensor_type.categories),
        key_mappings=dict(sensor_type.key_mappings),
        description=sensor_type.description,
        example_payload=sensor_type.example_payload,
    )


async def list_sensor_types(session: AsyncSession) -> list[SensorTypeInfo]:
    result = await session.execute(select(models.SensorType).order_by(models.SensorType.position))
    return [sensor_type_from_row(row) for row in result.scalars().all()]


async def find_sensor_type(session: AsyncSession, key: str) -> SensorTypeInfo | None:
    """Look a sensor type up by id, then by name."""
    row = await session.get(models.SensorType, key)
    if row is None:
        result = await session.execute(
            select(models.SensorType).where(models.SensorType.name == key)
        )
        row = result.scalars().first()
    return sensor_type_from_row(row) if row else None


async def create_sensor_type(session: AsyncSession, draft: SensorTypeDraft) -> SensorTypeInfo:
    problems = check_sensor_type(draft)
    if problems:
        raise InvalidDefinition(problems)
    await _ensure_unique_name(session, models.SensorType, draft.name, "sensor type")
    sensor_type = SensorTypeInfo(
        **draft.model_dump(exclude={"id"}),
        id=draft.id or new_id("st", draft.name),
        provides=mapped_variables_of(draft.key_mappings),
    )
    if await session.get(models.SensorType, sensor_type.id) is not None:
        raise DuplicateCatalogEntry("sensor type", sensor_type.id)

    row = sensor_type_to_row(sensor_type)
    row.position = await _next_position(session, models.SensorType)
    session.add(row)
    await session.commit()
    logger.info("Created sensor type %s (%s)", sensor_type.id, sensor_type.name)
    return sensor_type


async def delete_sensor_type(session: AsyncSession, sensor_type_id: str) -> None:
    row = await session.get(models.SensorType, sensor_type_id)
    if row is None:
        raise AssetNotFound(sensor_type_id, "sensor type")
    await session.delete(row)
    await session.commit()
    logger.info("Deleted sensor type %s", sensor_type_id)


# --- Machine types ---


async def list_machine_types(session: AsyncSession) -> list[MachineTypeInfo]:
    result = await session.execute(select(models.MachineType).order_by(models.MachineType.position))
    return [
        MachineTypeInfo(id=row.id, name=row.name, description=row.description)
        for row in result.scalars().all()
    ]


async def create_machine_type(session: AsyncSession, draft: MachineTypeDraft) -> MachineTypeInfo:
    await _ensure_unique_name(session, models.MachineType, draft.name, "machine type")
    info = MachineTypeInfo(
        id=draft.id or new_id("mt", draft.name), name=draft.name, description=draft.description
    )
    if await session.get(models.MachineType, info.id) is not None:
        raise DuplicateCatalogEntry("machine type", info.id)
    session.add(
        models.MachineType(
            id=info.id,
            name=info.name,
            description=info.description,
            position=await _next_position(session, models.MachineType),
        )
    )
    await session.commit()
    logger.info("Created machine type %s (%s)", info.id, info.name)
    return info


async def delete_machine_type(session: AsyncSession, machine_type_id: str) -> None:
    row = await session.get(models.MachineType, machine_type_id)
    if row is None:
        raise AssetNotFound(machine_type_id, "machine type")
    await session.delete(row)
    await session.commit()
    logger.info("Deleted machine type %s", machine_type_id)


# --- Zone types ---


async def list_zone_types(session: AsyncSession) -> list[ZoneTypeInfo]:
    result = await session.execute(select(models.ZoneType).order_by(models.ZoneType.position))
    return [
        ZoneTypeInfo(
            id=row.id,
            name=row.name,
            description=row.description,
            best_practices=row.best_practices,
        )
        for row in result.scalars().all()
    ]


async def create_zone_type(session: AsyncSession, draft: ZoneTypeDraft) -> ZoneTypeInfo:
    await _ensure_unique_name(session, models.ZoneType, draft.name, "zone type")
    info = ZoneTypeInfo(
        id=draft.id or new_id("zt", draft.name),
        name=draft.name,
        description=draft.description,
        best_practices=draft.best_practices,
    )
    if await session.get(models.ZoneType, info.id) is not None:
        raise DuplicateCatalogEntry("zone type", info.id)
    session.add(
        models.ZoneType(
            id=info.id,
            name=info.name,
            description=info.description,
            best_practices=info.best_practices,
            position=await _next_position(session, models.ZoneType),
        )
    )
    await session.commit()
    logger.info("Created zone type %s (%s)", info.id, info.name)
    return info


async def delete_zone_type(session: AsyncSession, zone_type_id: str) -> None:
    row = await session.get(models.ZoneType, zone_type_id)
    if row is None:
        raise AssetNotFound(zone_type_id, "zone type")
    await session.delete(row)
    await session.commit()
    logger.info("Deleted zone type %s", zone_type_id)


# --- Registry ---


def get_registry() -> RegistryResponse:
    return RegistryResponse(
        variables=[
            SystemVariableInfo(id=v.id, label=v.label, category=v.category)
            for v in SYSTEM_VARIABLE_REGISTRY.values()
        ],
        categories=[
            SensorCategoryInfo(id=category_id, label=label)
            for category_id, label in SENSOR_CATEGORY_REGISTRY.items()
        ],
    )
