"""Load the demo forest and admin catalog into an empty database."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from capnio import fixtures, models
from capnio.services.catalog_service import sensor_type_to_row
from capnio.services.repository import SqlAssetRepository, control_definition_to_row

logger = logging.getLogger(__name__)


async def is_seeded(session: AsyncSession) -> bool:
    result = await session.execute(select(func.count()).select_from(models.Site))
    return result.scalar_one() > 0


async def seed_demo_data(session: AsyncSession) -> bool:
    """Insert the demo data unless sites already exist. Returns True if seeded."""
    if await is_seeded(session):
        logger.info("Database already holds sites, skipping demo seed")
        return False

    for position, definition in enumerate(fixtures.demo_control_definitions()):
        row = control_definition_to_row(definition)
        row.position = position
        session.add(row)
    for position, sensor_type in enumerate(fixtures.demo_sensor_types()):
        row = sensor_type_to_row(sensor_type)
        row.position = position
        session.add(row)
    for position, machine_type in enumerate(fixtures.demo_machine_types()):
        session.add(
            models.MachineType(
                id=machine_type.id,
                name=machine_type.name,
                description=machine_type.description,
                position=position,
            )
        )
    for position, zone_type in enumerate(fixtures.demo_zone_types()):
        session.add(
            models.ZoneType(
                id=zone_type.id,
                name=zone_type.name,
                description=zone_type.description,
                best_practices=zone_type.best_practices,
                position=position,
            )
        )
    await session.flush()

    repo = SqlAssetRepository(session)
    forest = fixtures.demo_forest()
    for site in forest:
        await repo.add_site(site, None)
    await repo.commit()

    logger.info(
        "Seeded demo data: %d root sites, %d control definitions",
        len(forest),
        len(fixtures.CONTROL_DEFINITIONS),
    )
    return True
