"""Tests for the SQL asset repository and demo seeding."""

import pytest
from sqlalchemy import select

from capnio import models
from capnio.database import build_sessionmaker
from capnio.errors import AssetNotFound, CycleDetected, DuplicateAssetId, InvalidHierarchy
from capnio.schemas import ActiveControlInAlert, ConfiguredControl, Machine, Sensor, Site, Status, Zone
from capnio.services.repository import SqlAssetRepository
from capnio.services.seed_service import seed_demo_data


@pytest.fixture
async def empty_session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


class TestForestAssembly:
    @pytest.mark.asyncio
    async def test_seeded_forest_matches_fixtures(self, session, forest):
        stored = await SqlAssetRepository(session).get_forest()
        assert stored == forest

    @pytest.mark.asyncio
    async def test_seeding_is_idempotent(self, session):
        assert await seed_demo_data(session) is False
        result = await session.execute(select(models.Site.id))
        assert len(result.scalars().all()) == 10

    @pytest.mark.asyncio
    async def test_site_cycle_is_detected(self, empty_session):
        empty_session.add_all(
            [
                models.Site(id="a", parent_site_id="b", name="A"),
                models.Site(id="b", parent_site_id="a", name="B"),
            ]
        )
        await empty_session.commit()
        with pytest.raises(CycleDetected):
            await SqlAssetRepository(empty_session).get_forest()

    @pytest.mark.asyncio
    async def test_zone_cycle_is_detected(self, empty_session):
        empty_session.add_all(
            [
                models.Site(id="s", name="S"),
                models.Zone(id="z1", site_id="s", parent_zone_id="z2", name="Z1"),
                models.Zone(id="z2", site_id="s", parent_zone_id="z1", name="Z2"),
            ]
        )
        await empty_session.commit()
        with pytest.raises(CycleDetected):
            await SqlAssetRepository(empty_session).get_forest()

    @pytest.mark.asyncio
    async def test_dangling_parent_is_invalid(self, empty_session):
        empty_session.add_all(
            [
                models.Site(id="s", name="S"),
                models.Zone(id="z1", site_id="s", parent_zone_id="ghost", name="Z1"),
            ]
        )
        await empty_session.commit()
        with pytest.raises(InvalidHierarchy):
            await SqlAssetRepository(empty_session).get_forest()


class TestMachineState:
    @pytest.mark.asyncio
    async def test_get_machine_includes_zone(self, session):
        located = await SqlAssetRepository(session).get_machine("machine-lyon-frigo1")
        assert located.asset.name == "Réfrigérateur Positif Lyon"
        assert located.zone.id == "zone-lyon-cuisine"

    @pytest.mark.asyncio
    async def test_get_machine_missing(self, session):
        with pytest.raises(AssetNotFound):
            await SqlAssetRepository(session).get_machine("zone-lyon-cuisine")

    @pytest.mark.asyncio
    async def test_save_control_upserts(self, session):
        repo = SqlAssetRepository(session)
        configured = ConfiguredControl(is_active=False, params={"seuil_max": 3})
        await repo.save_control("machine-paris-frigo1", "control-001", configured)
        await repo.commit()

        machine = (await repo.get_machine("machine-paris-frigo1")).asset
        assert machine.configured_controls["control-001"] == configured

    @pytest.mark.asyncio
    async def test_save_and_clear_alert(self, session):
        repo = SqlAssetRepository(session)
        alert = ActiveControlInAlert(control_id="control-srv-cpu", alert_details="CPU 95%")
        await repo.save_alert("machine-pi-office-main", alert)
        await repo.save_machine_status("machine-pi-office-main", Status.RED)
        await repo.commit()
        machine = (await repo.get_machine("machine-pi-office-main")).asset
        assert machine.active_control_in_alert == alert
        assert machine.status == Status.RED

        await repo.save_alert("machine-pi-office-main", None)
        await repo.commit()
        machine = (await repo.get_machine("machine-pi-office-main")).asset
        assert machine.active_control_in_alert is None


class TestAssetWrites:
    @pytest.mark.asyncio
    async def test_add_nested_site(self, empty_session):
        repo = SqlAssetRepository(empty_session)
        site = Site(
            id="root",
            name="Root",
            zones=[Zone(id="z", name="Z", sub_zones=[Zone(id="zz", name="ZZ")])],
            sub_sites=[Site(id="child", name="Child", is_conceptual_sub_site=True)],
        )
        await repo.add_site(site, None)
        await repo.commit()
        assert await repo.get_forest() == [site]

    @pytest.mark.asyncio
    async def test_duplicate_id_across_kinds(self, session):
        repo = SqlAssetRepository(session)
        with pytest.raises(DuplicateAssetId):
            await repo.add_machine(Machine(id="zone-fournil", name="M", type="Frigo"), "zone-boutique")

    @pytest.mark.asyncio
    async def test_sensor_must_affect_local_machines(self, session):
        repo = SqlAssetRepository(session)
        sensor = Sensor(
            id="new-sensor",
            name="S",
            type_model="T-100",
            scope="machine",
            affected_machine_ids=["machine-paris-frigo1"],
        )
        with pytest.raises(InvalidHierarchy):
            await repo.add_sensor(sensor, "zone-lyon-cuisine")

    @pytest.mark.asyncio
    async def test_delete_machine_prunes_attached_sensor(self, session):
        repo = SqlAssetRepository(session)
        deleted = await repo.delete_asset("machine-lyon-frigo1")
        await repo.commit()
        assert deleted == ["machine-lyon-frigo1", "sensor-lyon-frigo1-temp"]

        forest = await repo.get_forest()
        lyon = forest[0].sub_sites[1].zones[0]
        assert lyon.machines == []
        assert [s.id for s in lyon.sensors] == ["sensor-lyon-cuisine-amb"]

    @pytest.mark.asyncio
    async def test_delete_site_removes_subtree(self, session):
        repo = SqlAssetRepository(session)
        deleted = await repo.delete_asset("site-agrostock-tunisie")
        await repo.commit()
        assert "machine-chf-tropic1" in deleted
        assert "site-entrepot-viandes" in deleted

        remaining = await session.execute(select(models.MachineAlert.machine_id))
        assert "machine-chf-tropic1" not in remaining.scalars().all()
        assert [s.id for s in await repo.get_forest()] == [
            "site-restaurants-france",
            "site-boulangerie-france",
            "site-livraison-france",
            "site-usine-tunisie",
            "site-pi-servers-demo",
        ]

    @pytest.mark.asyncio
    async def test_delete_zone_removes_sub_zones(self, session):
        repo = SqlAssetRepository(session)
        deleted = await repo.delete_asset("zone-fournil")
        await repo.commit()
        assert set(deleted) >= {"zone-fournil", "zone-fournil-petrin", "machine-petrin"}

    @pytest.mark.asyncio
    async def test_delete_unknown(self, session):
        with pytest.raises(AssetNotFound):
            await SqlAssetRepository(session).delete_asset("nope")
