"""Tests for the admin catalog endpoints."""

import pytest
from httpx import AsyncClient

CO2_CONTROL = {
    "name": "Contrôle CO2 Salle",
    "applicableMachineTypes": [],
    "variablesUtilisees": ["co2"],
    "verificationFormula": "sensor['co2'].value <= machine.params['seuil_co2']",
    "expectedParams": [{"id": "seuil_co2", "label": "Seuil CO2 (ppm)", "type": "number", "defaultValue": 1000}],
}


async def _control_view(client: AsyncClient, machine_id: str, control_id: str) -> dict:
    response = await client.get(f"/api/machines/{machine_id}/controls")
    return next(c for c in response.json()["controls"] if c["control"]["id"] == control_id)


class TestControlDefinitions:
    @pytest.mark.asyncio
    async def test_list_controls(self, client: AsyncClient):
        response = await client.get("/api/admin/controls")
        assert response.status_code == 200

        controls = response.json()
        assert len(controls) == 8
        assert controls[0]["variablesUtilisees"] == ["temp"]
        assert controls[0]["expectedParams"][0]["defaultValue"] == 0

    @pytest.mark.asyncio
    async def test_create_control(self, client: AsyncClient):
        response = await client.post("/api/admin/controls", json=CO2_CONTROL)
        assert response.status_code == 201

        control_id = response.json()["id"]
        assert control_id.startswith("control-")
        fetched = await client.get(f"/api/admin/controls/{control_id}")
        assert fetched.json()["name"] == "Contrôle CO2 Salle"

    @pytest.mark.asyncio
    async def test_new_control_without_types_applies_to_every_machine(self, client: AsyncClient):
        await client.post("/api/admin/controls", json={**CO2_CONTROL, "id": "control-co2"})
        response = await client.get("/api/machines/machine-petrin/controls")
        assert [c["control"]["id"] for c in response.json()["controls"]] == ["control-co2"]

    @pytest.mark.asyncio
    async def test_unreferenced_variable_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/controls",
            json={**CO2_CONTROL, "variablesUtilisees": ["co2", "hum"]},
        )
        assert response.status_code == 422

        detail = response.json()["detail"]
        assert detail["error"] == "InvalidDefinition"
        assert detail["problems"] == ["variable 'hum' is not referenced by any formula"]

    @pytest.mark.asyncio
    async def test_duplicate_control_id(self, client: AsyncClient):
        response = await client.post("/api/admin/controls", json={**CO2_CONTROL, "id": "control-001"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_control(self, client: AsyncClient):
        current = (await client.get("/api/admin/controls/control-003")).json()
        response = await client.put(
            "/api/admin/controls/control-003",
            json={**current, "description": "Pression d'huile minimale."},
        )
        assert response.status_code == 200
        assert response.json()["description"] == "Pression d'huile minimale."

    @pytest.mark.asyncio
    async def test_update_switches_off_configurations_that_no_longer_validate(self, client: AsyncClient):
        """Test a new required parameter deactivates machines configured without it."""
        response = await client.put(
            "/api/machines/machine-pi-office-main/controls/control-srv-mem",
            json={"isActive": True, "params": {}, "sensorMappings": {"mem_usage_percent": "pi-office-mem-usage"}},
        )
        assert response.status_code == 200

        current = (await client.get("/api/admin/controls/control-srv-mem")).json()
        current["expectedParams"].append({"id": "seuil_crit", "label": "Seuil critique (%)", "type": "number"})
        response = await client.put("/api/admin/controls/control-srv-mem", json=current)
        assert response.status_code == 200

        view = await _control_view(client, "machine-pi-office-main", "control-srv-mem")
        assert view["state"] == "configured_inactive"
        assert view["configuration"]["params"] == {"seuil_max_mem": 85}

    @pytest.mark.asyncio
    async def test_update_drops_params_no_longer_declared(self, client: AsyncClient):
        current = (await client.get("/api/admin/controls/control-srv-temp")).json()
        param = current["expectedParams"][0]
        current["expectedParams"] = [{**param, "id": "seuil_haut", "defaultValue": 80}]
        response = await client.put("/api/admin/controls/control-srv-temp", json=current)
        assert response.status_code == 200

        view = await _control_view(client, "machine-pi-office-main", "control-srv-temp")
        assert view["state"] == "configured_active"
        assert view["configuration"]["params"] == {"seuil_haut": 80}

    @pytest.mark.asyncio
    async def test_update_clears_alert_of_machines_no_longer_covered(self, client: AsyncClient):
        current = (await client.get("/api/admin/controls/control-001")).json()
        response = await client.put(
            "/api/admin/controls/control-001", json={**current, "applicableMachineTypes": ["Frigo"]}
        )
        assert response.status_code == 200

        machine = (await client.get("/api/assets/machine-paris-frigo2")).json()["asset"]
        assert machine["configuredControls"]["control-001"]["isActive"] is False
        assert machine["activeControlInAlert"] is None
        assert machine["status"] == "green"

    @pytest.mark.asyncio
    async def test_delete_control_removes_configurations(self, client: AsyncClient):
        response = await client.delete("/api/admin/controls/control-001")
        assert response.status_code == 204

        assert (await client.get("/api/admin/controls/control-001")).status_code == 404
        machine = (await client.get("/api/assets/machine-paris-frigo2")).json()["asset"]
        assert machine["configuredControls"] == {}
        assert machine["activeControlInAlert"] is None


class TestSensorTypes:
    @pytest.mark.asyncio
    async def test_list_sensor_types_with_provides(self, client: AsyncClient):
        response = await client.get("/api/admin/sensor-types")
        assert response.status_code == 200

        types = {t["id"]: t for t in response.json()}
        assert types["st-co2-zair"]["provides"] == ["co2", "rssi"]
        assert types["st-thl-v21"]["keyMappings"]["t"] == "temp"

    @pytest.mark.asyncio
    async def test_create_sensor_type(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/sensor-types",
            json={
                "name": "Pince Ampèremétrique",
                "categories": ["electrical"],
                "keyMappings": {"v": "tension", "a": "courant"},
            },
        )
        assert response.status_code == 201
        assert response.json()["provides"] == ["tension", "courant"]

    @pytest.mark.asyncio
    async def test_unknown_variable_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/sensor-types",
            json={"name": "Sonde X", "categories": ["temperature"], "keyMappings": {"t": "temperature_x"}},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "InvalidDefinition"

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/sensor-types",
            json={"name": "Sonde Y", "categories": ["weather"], "keyMappings": {}},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/sensor-types",
            json={"name": "Détecteur CO2 Z-Air", "categories": ["air_quality"]},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete_sensor_type(self, client: AsyncClient):
        assert (await client.delete("/api/admin/sensor-types/st-temp-t100")).status_code == 204
        assert (await client.delete("/api/admin/sensor-types/st-temp-t100")).status_code == 404


class TestMachineAndZoneTypes:
    @pytest.mark.asyncio
    async def test_create_machine_type(self, client: AsyncClient):
        response = await client.post("/api/admin/machine-types", json={"name": "Four Professionnel"})
        assert response.status_code == 201

        names = [t["name"] for t in (await client.get("/api/admin/machine-types")).json()]
        assert names[-1] == "Four Professionnel"

    @pytest.mark.asyncio
    async def test_machine_type_name_is_unique(self, client: AsyncClient):
        response = await client.post("/api/admin/machine-types", json={"name": "frigo"})
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "DuplicateEntry"

    @pytest.mark.asyncio
    async def test_delete_machine_type(self, client: AsyncClient):
        assert (await client.delete("/api/admin/machine-types/mt-001")).status_code == 204
        assert (await client.delete("/api/admin/machine-types/mt-001")).status_code == 404

    @pytest.mark.asyncio
    async def test_create_zone_type(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/zone-types",
            json={"name": "Salle Serveurs", "bestPractices": "Maintenir 18-27°C."},
        )
        assert response.status_code == 201
        assert response.json()["bestPractices"] == "Maintenir 18-27°C."

    @pytest.mark.asyncio
    async def test_delete_zone_type(self, client: AsyncClient):
        assert (await client.delete("/api/admin/zone-types/zt-cuisine")).status_code == 204
        types = (await client.get("/api/admin/zone-types")).json()
        assert [t["id"] for t in types] == ["zt-chambre-froide"]


@pytest.mark.asyncio
async def test_system_variable_registry(client: AsyncClient):
    response = await client.get("/api/admin/system-variables")
    assert response.status_code == 200

    body = response.json()
    variables = {v["id"]: v for v in body["variables"]}
    assert variables["temp"]["category"] == "temperature"
    assert "electrical" in {c["id"] for c in body["categories"]}
