"""Asset repository — storage-agnostic interface plus its SQLAlchemy implementation.

Storage is flat: one table per entity kind keyed by id, with parent pointers.
The nested Site snapshot the core logic works on is assembled on every read.
"""

import logging
from collections import defaultdict
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from capnio import models, schemas
from capnio.core.hierarchy import Located, find_machine
from capnio.errors import AssetNotFound, CycleDetected, DuplicateAssetId, InvalidHierarchy

logger = logging.getLogger(__name__)

__all__ = [
    "AssetRepository",
    "SqlAssetRepository",
    "control_definition_from_row",
    "control_definition_to_row",
]


class AssetRepository(Protocol):
    """What the control and asset services need from storage."""

    async def get_forest(self) -> list[schemas.Site]: ...

    async def get_machine(self, machine_id: str) -> Located: ...

    async def list_control_definitions(self) -> list[schemas.ControlDefinition]: ...

    async def get_control_definition(self, control_id: str) -> schemas.ControlDefinition: ...

    async def save_control(
        self, machine_id: str, control_id: str, configured: schemas.ConfiguredControl
    ) -> None: ...

    async def save_alert(
        self, machine_id: str, alert: schemas.ActiveControlInAlert | None
    ) -> None: ...

    async def save_machine_status(self, machine_id: str, status: schemas.Status) -> None: ...

    async def add_site(self, site: schemas.Site, parent_site_id: str | None) -> None: ...

    async def add_zone(
        self, zone: schemas.Zone, site_id: str, parent_zone_id: str | None
    ) -> None: ...

    async def add_machine(self, machine: schemas.Machine, zone_id: str) -> None: ...

    async def add_sensor(self, sensor: schemas.Sensor, zone_id: str) -> None: ...

    async def delete_asset(self, asset_id: str) -> list[str]: ...

    async def commit(self) -> None: ...


def _now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)  # Use naive UTC for SQLite


# --- Row <-> schema conversion ---


def control_definition_from_row(row: models.ControlDefinition) -> schemas.ControlDefinition:
    return schemas.ControlDefinition(
        id=row.id,
        name=row.name,
        applicable_machine_types=list(row.applicable_machine_types),
        required_sensor_categories=list(row.required_sensor_categories),
        variables=list(row.variables),
        calculation_formula=row.calculation_formula,
        verification_formula=row.verification_formula,
        description=row.description,
        expected_params=[schemas.ControlParameter.model_validate(p) for p in row.expected_params],
        checklist=list(row.checklist),
    )


def control_definition_to_row(
    definition: schemas.ControlDefinition, row: models.ControlDefinition | None = None
) -> models.ControlDefinition:
    row = row or models.ControlDefinition(id=definition.id)
    row.name = definition.name
    row.applicable_machine_types = list(definition.applicable_machine_types)
    row.required_sensor_categories = list(definition.required_sensor_categories)
    row.variables = list(definition.variables)
    row.calculation_formula = definition.calculation_formula
    row.verification_formula = definition.verification_formula
    row.description = definition.description
    row.expected_params = [p.model_dump(mode="json") for p in definition.expected_params]
    row.checklist = list(definition.checklist)
    return row


def _machine_from_row(
    row: models.Machine,
    sensors: list[models.MachineSensor],
    configs: list[models.ConfiguredControl],
    alert: models.MachineAlert | None,
) -> schemas.Machine:
    return schemas.Machine(
        id=row.id,
        name=row.name,
        type=row.type,
        status=schemas.Status(row.status),
        model=row.model,
        notes=row.notes,
        active_control_in_alert=(
            schemas.ActiveControlInAlert.model_validate(alert.details) if alert else None
        ),
        available_sensors=[
            schemas.AvailableSensor(id=s.sensor_id, name=s.name, provides=list(s.provides))
            for s in sensors
        ],
        configured_controls={
            c.control_id: schemas.ConfiguredControl(
                is_active=c.is_active,
                params=dict(c.params),
                sensor_mappings=dict(c.sensor_mappings),
            )
            for c in configs
        },
    )


def _sensor_from_row(row: models.Sensor) -> schemas.Sensor:
    return schemas.Sensor(
        id=row.id,
        name=row.name,
        type_model=row.type_model,
        scope=row.scope,
        affected_machine_ids=list(row.affected_machine_ids),
        provides=list(row.provides),
        status=schemas.Status(row.status) if row.status else None,
    )


class SqlAssetRepository:
    """AssetRepository over an AsyncSession. Writes are last-writer-wins."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _all(self, model, order_by=None) -> list:
        query = select(model)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _next_position(self, model) -> int:
        result = await self.session.execute(select(func.coalesce(func.max(model.position), -1)))
        return int(result.scalar_one()) + 1

    # --- Reads ---

    async def get_forest(self) -> list[schemas.Site]:
        """Assemble the nested forest from the flat tables.

        Rows that cannot be reached from a root site mean the parent pointers
        loop (CycleDetected) or dangle (InvalidHierarchy).
        """
        site_rows = await self._all(models.Site, models.Site.position)
        zone_rows = await self._all(models.Zone, models.Zone.position)
        machine_rows = await self._all(models.Machine, models.Machine.position)
        machine_sensor_rows = await self._all(models.MachineSensor, models.MachineSensor.position)
        sensor_rows = await self._all(models.Sensor, models.Sensor.position)
        config_rows = await self._all(models.ConfiguredControl)
        alert_rows = await self._all(models.MachineAlert)

        sensors_by_machine: dict[str, list[models.MachineSensor]] = defaultdict(list)
        for row in machine_sensor_rows:
            sensors_by_machine[row.machine_id].append(row)
        configs_by_machine: dict[str, list[models.ConfiguredControl]] = defaultdict(list)
        for row in config_rows:
            configs_by_machine[row.machine_id].append(row)
        alert_by_machine = {row.machine_id: row for row in alert_rows}

        machines_by_zone: dict[str, list[schemas.Machine]] = defaultdict(list)
        for row in machine_rows:
            machines_by_zone[row.zone_id].append(
                _machine_from_row(
                    row,
                    sensors_by_machine[row.id],
                    configs_by_machine[row.id],
                    alert_by_machine.get(row.id),
                )
            )
        sensors_by_zone: dict[str, list[schemas.Sensor]] = defaultdict(list)
        for row in sensor_rows:
            sensors_by_zone[row.zone_id].append(_sensor_from_row(row))

        root_zones: dict[str, list[models.Zone]] = defaultdict(list)
        child_zones: dict[str, list[models.Zone]] = defaultdict(list)
        for row in zone_rows:
            if row.parent_zone_id is None:
                root_zones[row.site_id].append(row)
            else:
                child_zones[row.parent_zone_id].append(row)
        child_sites: dict[str | None, list[models.Site]] = defaultdict(list)
        for row in site_rows:
            child_sites[row.parent_site_id].append(row)

        reached: set[str] = set()

        def build_zone(row: models.Zone, path: frozenset[str]) -> schemas.Zone:
            if row.id in path:
                raise CycleDetected(row.id)
            reached.add(row.id)
            inner = path | {row.id}
            return schemas.Zone(
                id=row.id,
                name=row.name,
                zone_type_id=row.zone_type_id,
                machines=machines_by_zone[row.id],
                sensors=sensors_by_zone[row.id],
                sub_zones=[build_zone(child, inner) for child in child_zones[row.id]],
            )

        def build_site(row: models.Site, path: frozenset[str]) -> schemas.Site:
            if row.id in path:
                raise CycleDetected(row.id)
            reached.add(row.id)
            inner = path | {row.id}
            return schemas.Site(
                id=row.id,
                name=row.name,
                location=row.location,
                is_conceptual_sub_site=row.is_conceptual_sub_site,
                zones=[build_zone(z, frozenset()) for z in root_zones[row.id]],
                sub_sites=[build_site(child, inner) for child in child_sites[row.id]],
            )

        forest = [build_site(row, frozenset()) for row in child_sites[None]]

        known = {row.id: row.parent_site_id for row in site_rows}
        known_zones = {row.id: row.parent_zone_id or row.site_id for row in zone_rows}
        for row_id, parent_id in [*known.items(), *known_zones.items()]:
            if row_id in reached:
                continue
            if parent_id not in known and parent_id not in known_zones:
                raise InvalidHierarchy(f"{row_id} points to missing parent {parent_id}")
            raise CycleDetected(row_id)

        return forest

    async def get_machine(self, machine_id: str) -> Located:
        located = find_machine(await self.get_forest(), machine_id)
        if located is None:
            raise AssetNotFound(machine_id, "machine")
        return located

    async def list_control_definitions(self) -> list[schemas.ControlDefinition]:
        rows = await self._all(models.ControlDefinition, models.ControlDefinition.position)
        return [control_definition_from_row(row) for row in rows]

    async def get_control_definition(self, control_id: str) -> schemas.ControlDefinition:
        row = await self.session.get(models.ControlDefinition, control_id)
        if row is None:
            raise AssetNotFound(control_id, "control")
        return control_definition_from_row(row)

    # --- Control state writes ---

    async def save_control(
        self, machine_id: str, control_id: str, configured: schemas.ConfiguredControl
    ) -> None:
        await self.session.merge(
            models.ConfiguredControl(
                machine_id=machine_id,
                control_id=control_id,
                is_active=configured.is_active,
                params=dict(configured.params),
                sensor_mappings=dict(configured.sensor_mappings),
                updated_at=_now(),
            )
        )

    async def save_alert(
        self, machine_id: str, alert: schemas.ActiveControlInAlert | None
    ) -> None:
        if alert is None:
            await self.session.execute(
                delete(models.MachineAlert).where(models.MachineAlert.machine_id == machine_id)
            )
            return
        await self.session.merge(
            models.MachineAlert(
                machine_id=machine_id,
                control_id=alert.control_id,
                details=alert.model_dump(mode="json"),
                raised_at=_now(),
            )
        )

    async def save_machine_status(self, machine_id: str, status: schemas.Status) -> None:
        row = await self.session.get(models.Machine, machine_id)
        if row is None:
            raise AssetNotFound(machine_id, "machine")
        row.status = status.value

    # --- Asset writes ---

    async def _ensure_unused(self, asset_id: str) -> None:
        for model in (models.Site, models.Zone, models.Machine, models.Sensor):
            if await self.session.get(model, asset_id) is not None:
                raise DuplicateAssetId(asset_id)

    async def add_site(self, site: schemas.Site, parent_site_id: str | None) -> None:
        await self._ensure_unused(site.id)
        if parent_site_id and await self.session.get(models.Site, parent_site_id) is None:
            raise AssetNotFound(parent_site_id, "site")
        self.session.add(
            models.Site(
                id=site.id,
                parent_site_id=parent_site_id,
                name=site.name,
                location=site.location,
                is_conceptual_sub_site=site.is_conceptual_sub_site,
                position=await self._next_position(models.Site),
            )
        )
        await self.session.flush()
        for zone in site.zones:
            await self.add_zone(zone, site.id, None)
        for sub_site in site.sub_sites:
            await self.add_site(sub_site, site.id)

    async def add_zone(
        self, zone: schemas.Zone, site_id: str, parent_zone_id: str | None
    ) -> None:
        await self._ensure_unused(zone.id)
        if await self.session.get(models.Site, site_id) is None:
            raise AssetNotFound(site_id, "site")
        if parent_zone_id:
            parent = await self.session.get(models.Zone, parent_zone_id)
            if parent is None:
                raise AssetNotFound(parent_zone_id, "zone")
            if parent.site_id != site_id:
                raise InvalidHierarchy(f"zone {parent_zone_id} does not belong to site {site_id}")
        self.session.add(
            models.Zone(
                id=zone.id,
                site_id=site_id,
                parent_zone_id=parent_zone_id,
                name=zone.name,
                zone_type_id=zone.zone_type_id,
                position=await self._next_position(models.Zone),
            )
        )
        await self.session.flush()
        for machine in zone.machines:
            await self.add_machine(machine, zone.id)
        for sensor in zone.sensors:
            await self.add_sensor(sensor, zone.id)
        for sub_zone in zone.sub_zones:
            await self.add_zone(sub_zone, site_id, zone.id)

    async def add_machine(self, machine: schemas.Machine, zone_id: str) -> None:
        await self._ensure_unused(machine.id)
        if await self.session.get(models.Zone, zone_id) is None:
            raise AssetNotFound(zone_id, "zone")
        self.session.add(
            models.Machine(
                id=machine.id,
                zone_id=zone_id,
                name=machine.name,
                type=machine.type,
                status=machine.status.value,
                model=machine.model,
                notes=machine.notes,
                position=await self._next_position(models.Machine),
            )
        )
        for position, sensor in enumerate(machine.available_sensors):
            self.session.add(
                models.MachineSensor(
                    machine_id=machine.id,
                    sensor_id=sensor.id,
                    name=sensor.name,
                    provides=list(sensor.provides),
                    position=position,
                )
            )
        await self.session.flush()
        for control_id, configured in machine.configured_controls.items():
            await self.save_control(machine.id, control_id, configured)
        if machine.active_control_in_alert is not None:
            await self.save_alert(machine.id, machine.active_control_in_alert)

    async def add_sensor(self, sensor: schemas.Sensor, zone_id: str) -> None:
        await self._ensure_unused(sensor.id)
        if await self.session.get(models.Zone, zone_id) is None:
            raise AssetNotFound(zone_id, "zone")
        for machine_id in sensor.affected_machine_ids:
            machine = await self.session.get(models.Machine, machine_id)
            if machine is None or machine.zone_id != zone_id:
                raise InvalidHierarchy(
                    f"sensor {sensor.id} affects machine {machine_id} outside zone {zone_id}"
                )
        self.session.add(
            models.Sensor(
                id=sensor.id,
                zone_id=zone_id,
                name=sensor.name,
                type_model=sensor.type_model,
                scope=sensor.scope,
                affected_machine_ids=list(sensor.affected_machine_ids),
                provides=list(sensor.provides),
                status=sensor.status.value if sensor.status else None,
                position=await self._next_position(models.Sensor),
            )
        )
        await self.session.flush()

    async def delete_asset(self, asset_id: str) -> list[str]:
        """Delete an asset and everything it owns. Returns the deleted ids."""
        if await self.session.get(models.Site, asset_id) is not None:
            site_ids = await self._descendant_ids(models.Site, models.Site.parent_site_id, asset_id)
            zone_rows = await self.session.execute(
                select(models.Zone.id).where(models.Zone.site_id.in_(site_ids))
            )
            zone_ids = list(zone_rows.scalars().all())
            deleted = await self._delete_zones(zone_ids)
            await self.session.execute(delete(models.Site).where(models.Site.id.in_(site_ids)))
            return site_ids + deleted

        if await self.session.get(models.Zone, asset_id) is not None:
            zone_ids = await self._descendant_ids(models.Zone, models.Zone.parent_zone_id, asset_id)
            return await self._delete_zones(zone_ids)

        machine = await self.session.get(models.Machine, asset_id)
        if machine is not None:
            return await self._delete_machine(machine)

        sensor = await self.session.get(models.Sensor, asset_id)
        if sensor is not None:
            await self.session.delete(sensor)
            await self._unmap_sensors([asset_id])
            return [asset_id]

        raise AssetNotFound(asset_id)

    async def _descendant_ids(self, model, parent_column, root_id: str) -> list[str]:
        result = await self.session.execute(select(model.id, parent_column))
        children: dict[str, list[str]] = defaultdict(list)
        for row_id, parent_id in result.all():
            if parent_id is not None:
                children[parent_id].append(row_id)
        collected: list[str] = []
        pending = [root_id]
        while pending:
            current = pending.pop()
            if current in collected:
                raise CycleDetected(current)
            collected.append(current)
            pending.extend(children[current])
        return collected

    async def _delete_zones(self, zone_ids: list[str]) -> list[str]:
        if not zone_ids:
            return []
        machine_rows = await self.session.execute(
            select(models.Machine.id).where(models.Machine.zone_id.in_(zone_ids))
        )
        machine_ids = list(machine_rows.scalars().all())
        sensor_rows = await self.session.execute(
            select(models.Sensor.id).where(models.Sensor.zone_id.in_(zone_ids))
        )
        sensor_ids = list(sensor_rows.scalars().all())

        await self._delete_machine_rows(machine_ids)
        await self.session.execute(delete(models.Sensor).where(models.Sensor.id.in_(sensor_ids)))
        await self._unmap_sensors(sensor_ids)
        await self.session.execute(delete(models.Zone).where(models.Zone.id.in_(zone_ids)))
        return zone_ids + machine_ids + sensor_ids

    async def _delete_machine(self, machine: models.Machine) -> list[str]:
        deleted = [machine.id]
        result = await self.session.execute(
            select(models.Sensor).where(models.Sensor.zone_id == machine.zone_id)
        )
        for sensor in result.scalars().all():
            if machine.id not in sensor.affected_machine_ids:
                continue
            remaining = [mid for mid in sensor.affected_machine_ids if mid != machine.id]
            if sensor.scope == "machine" and not remaining:
                await self.session.delete(sensor)
                deleted.append(sensor.id)
            else:
                sensor.affected_machine_ids = remaining
        await self._unmap_sensors(deleted[1:])
        await self._delete_machine_rows([machine.id])
        return deleted

    async def _unmap_sensors(self, sensor_ids: list[str]) -> None:
        """Drop control mappings to deleted sensors.

        A control that loses a mapping is switched off and its alert cleared.
        Sensors a machine declares itself keep their mappings.
        """
        if not sensor_ids:
            return
        gone = set(sensor_ids)
        declared = await self.session.execute(
            select(models.MachineSensor.machine_id, models.MachineSensor.sensor_id).where(
                models.MachineSensor.sensor_id.in_(sensor_ids)
            )
        )
        still_declared = {(m, s) for m, s in declared.all()}

        result = await self.session.execute(select(models.ConfiguredControl))
        for row in result.scalars().all():
            kept = {
                variable: sensor_id
                for variable, sensor_id in row.sensor_mappings.items()
                if sensor_id not in gone or (row.machine_id, sensor_id) in still_declared
            }
            if kept == row.sensor_mappings:
                continue
            row.sensor_mappings = kept
            row.updated_at = _now()
            if not row.is_active:
                continue
            row.is_active = False
            logger.warning(
                "Deactivated %s on %s: a mapped sensor was deleted", row.control_id, row.machine_id
            )
            alert = await self.session.get(models.MachineAlert, row.machine_id)
            if alert is not None and alert.control_id == row.control_id:
                await self.session.delete(alert)
                await self.save_machine_status(row.machine_id, schemas.Status.GREEN)

    async def _delete_machine_rows(self, machine_ids: list[str]) -> None:
        if not machine_ids:
            return
        for model in (models.MachineSensor, models.ConfiguredControl, models.MachineAlert):
            await self.session.execute(delete(model).where(model.machine_id.in_(machine_ids)))
        await self.session.execute(delete(models.Machine).where(models.Machine.id.in_(machine_ids)))

    async def commit(self) -> None:
        await self.session.commit()
