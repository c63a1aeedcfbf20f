"""Asset service layer — forest reads, path resolution and client asset editing."""

import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from capnio.core.hierarchy import BreadcrumbEntry, PathNotFound, ResolvedPath, locate, resolve_path
from capnio.core.status import annotate_statuses
from capnio.errors import AssetNotFound, InvalidHierarchy
from capnio.schemas import Machine, Sensor, Site, Zone
from capnio.schemas.api import (
    AssetResponse,
    BreadcrumbItem,
    MachineCreate,
    SensorCreate,
    SiteCreate,
    ZoneCreate,
)
from capnio.services.catalog_service import find_sensor_type, new_id
from capnio.services.repository import SqlAssetRepository

logger = logging.getLogger(__name__)


def breadcrumb_items(entries: list[BreadcrumbEntry]) -> list[BreadcrumbItem]:
    return [BreadcrumbItem(id=e.id, name=e.name, kind=e.kind) for e in entries]


async def get_forest(session: AsyncSession) -> list[Site]:
    """All root sites with derived site and zone statuses filled in."""
    forest = await SqlAssetRepository(session).get_forest()
    return annotate_statuses(forest)


async def resolve(session: AsyncSession, segments: list[str]) -> ResolvedPath | PathNotFound:
    forest = await get_forest(session)
    result = resolve_path(forest, segments)
    if not result.found:
        logger.info("Path %s stopped at segment %r", "/".join(segments), result.segment)
    return result


async def get_asset(session: AsyncSession, asset_id: str) -> AssetResponse:
    forest = await get_forest(session)
    located = locate(forest, asset_id)
    if located is None:
        raise AssetNotFound(asset_id)
    chain = [*located.ancestors, located.asset]
    return AssetResponse(
        asset=located.asset,
        parent_id=located.parent.id if located.parent else None,
        breadcrumb=[BreadcrumbItem(id=a.id, name=a.name, kind=a.kind) for a in chain],
    )


async def create_site(session: AsyncSession, body: SiteCreate) -> Site:
    repo = SqlAssetRepository(session)
    site = Site(
        id=body.id or new_id("site", body.name),
        name=body.name,
        location=body.location,
        is_conceptual_sub_site=body.is_conceptual_sub_site,
    )
    await repo.add_site(site, body.parent_site_id)
    await repo.commit()
    logger.info("Created site %s under %s", site.id, body.parent_site_id or "root")
    return site


async def create_zone(session: AsyncSession, site_id: str, body: ZoneCreate) -> Zone:
    repo = SqlAssetRepository(session)
    zone = Zone(
        id=body.id or new_id("zone", body.name),
        name=body.name,
        zone_type_id=body.zone_type_id,
    )
    await repo.add_zone(zone, site_id, body.parent_zone_id)
    await repo.commit()
    logger.info("Created zone %s in site %s", zone.id, site_id)
    return zone


async def create_machine(session: AsyncSession, zone_id: str, body: MachineCreate) -> Machine:
    repo = SqlAssetRepository(session)
    machine = Machine(
        id=body.id or new_id("machine", body.name),
        name=body.name,
        type=body.type,
        status=body.status,
        model=body.model,
        notes=body.notes,
        available_sensors=body.available_sensors,
    )
    await repo.add_machine(machine, zone_id)
    await repo.commit()
    logger.info("Added machine %s (%s) to zone %s", machine.id, machine.type, zone_id)
    return machine


async def create_sensor(session: AsyncSession, zone_id: str, body: SensorCreate) -> Sensor:
    """Add a sensor to a zone.

    When ``provides`` is empty it is taken from the sensor type's mapped
    variables (the type is looked up by id, then by name).
    """
    provides = list(body.provides)
    if not provides:
        sensor_type = await find_sensor_type(session, body.type_model)
        if sensor_type is not None:
            provides = list(sensor_type.provides)

    try:
        sensor = Sensor(
            id=body.id or new_id("sensor", body.name),
            name=body.name,
            type_model=body.type_model,
            scope=body.scope,
            affected_machine_ids=body.affected_machine_ids,
            provides=provides,
            status=body.status,
        )
    except ValidationError as e:
        raise InvalidHierarchy(str(e.errors()[0]["msg"])) from e

    repo = SqlAssetRepository(session)
    await repo.add_sensor(sensor, zone_id)
    await repo.commit()
    logger.info("Added %s-scoped sensor %s to zone %s", sensor.scope, sensor.id, zone_id)
    return sensor


async def delete_asset(session: AsyncSession, asset_id: str) -> list[str]:
    repo = SqlAssetRepository(session)
    deleted = await repo.delete_asset(asset_id)
    await repo.commit()
    logger.info("Deleted asset %s (%d records removed)", asset_id, len(deleted))
    return deleted
