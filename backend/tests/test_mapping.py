"""Tests for sensor compatibility and configuration validation."""

import pytest

from capnio.core.hierarchy import find_machine
from capnio.core.mapping import (
    AMBIENT_SUFFIX,
    applicable_controls,
    candidate_sensors,
    check_configuration,
    compatible_sensors,
    validate_configuration,
)
from capnio.schemas import (
    AvailableSensor,
    ConfiguredControl,
    ControlDefinition,
    ControlParameter,
    Machine,
)


@pytest.fixture
def control():
    return ControlDefinition(
        id="c1",
        name="Contrôle Température",
        variables=["temp"],
        verification_formula="sensor['temp'].value <= machine.params['seuil_max']",
        expected_params=[ControlParameter(id="seuil_max", label="Seuil max", default_value=5)],
    )


@pytest.fixture
def machine():
    return Machine(
        id="m1",
        name="Frigo 1",
        type="Frigo",
        available_sensors=[
            AvailableSensor(id="s1", name="Sonde", provides=["temp"]),
            AvailableSensor(id="s2", name="CO2", provides=["co2"]),
        ],
    )


class TestCompatibleSensors:
    def test_filters_on_provides(self, machine):
        assert [s.id for s in compatible_sensors(machine, "temp")] == ["s1"]

    def test_match_is_case_insensitive(self, machine):
        assert [s.id for s in compatible_sensors(machine, "TEMP")] == ["s1"]

    def test_no_match(self, machine):
        assert compatible_sensors(machine, "pression_huile") == []

    def test_zone_fallback_lists_attached_then_ambient(self, forest):
        located = find_machine(forest, "machine-lyon-frigo1")
        sensors = candidate_sensors(located.asset, located.zone)
        assert [s.id for s in sensors] == ["sensor-lyon-frigo1-temp", "sensor-lyon-cuisine-amb"]
        assert sensors[1].name.endswith(AMBIENT_SUFFIX)

    def test_declared_sensors_win_over_zone(self, forest):
        located = find_machine(forest, "machine-paris-frigo1")
        sensors = candidate_sensors(located.asset, located.zone)
        assert [s.id for s in sensors] == ["sensor-paris-frigo1-temp"]


class TestValidateConfiguration:
    def test_default_param_applied_and_mapping_accepted(self, control, machine):
        configured = ConfiguredControl(is_active=True, sensor_mappings={"temp": "s1"})
        result = validate_configuration(control, configured, machine)
        assert result.ok
        assert result.params == {"seuil_max": 5}
        assert result.sensor_mappings == {"temp": "s1"}

    def test_empty_mapping_is_unmapped(self, control, machine):
        configured = ConfiguredControl(is_active=True, sensor_mappings={})
        result = validate_configuration(control, configured, machine)
        assert not result.ok
        assert result.codes() == ["UnmappedVariable"]
        assert result.issues[0].subject == "temp"

    def test_blank_sensor_id_is_unmapped(self, control, machine):
        result = validate_configuration(control, ConfiguredControl(sensor_mappings={"temp": ""}), machine)
        assert result.codes() == ["UnmappedVariable"]

    def test_sensor_not_providing_variable(self, control, machine):
        result = validate_configuration(control, ConfiguredControl(sensor_mappings={"temp": "s2"}), machine)
        assert result.codes() == ["IncompatibleSensor"]

    def test_mapping_keys_ignore_case(self, control, machine):
        configured = ConfiguredControl(is_active=True, sensor_mappings={"TEMP": "s1"})
        result = validate_configuration(control, configured, machine)
        assert result.ok
        assert result.sensor_mappings == {"temp": "s1"}

    def test_case_variant_with_wrong_sensor_is_incompatible(self, control, machine):
        result = validate_configuration(control, ConfiguredControl(sensor_mappings={" Temp": "s2"}), machine)
        assert result.codes() == ["IncompatibleSensor"]

    def test_unknown_sensor(self, control, machine):
        result = validate_configuration(control, ConfiguredControl(sensor_mappings={"temp": "ghost"}), machine)
        assert result.codes() == ["IncompatibleSensor"]

    def test_missing_param_without_default(self, definitions):
        four = Machine(
            id="four",
            name="Four",
            type="Four Professionnel",
            available_sensors=[AvailableSensor(id="t", name="T", provides=["temp_four"])],
        )
        configured = ConfiguredControl(sensor_mappings={"temp_four": "t"})
        result = validate_configuration(definitions["control-temp-four"], configured, four)
        assert result.codes() == ["MissingRequiredParam"]
        assert result.issues[0].subject == "temp_max_four"

    def test_numeric_text_is_coerced(self, control, machine):
        configured = ConfiguredControl(params={"seuil_max": "7.5"}, sensor_mappings={"temp": "s1"})
        result = validate_configuration(control, configured, machine)
        assert result.ok
        assert result.params == {"seuil_max": 7.5}

    def test_invalid_and_unknown_params(self, control, machine):
        configured = ConfiguredControl(
            params={"seuil_max": "chaud", "extra": 1}, sensor_mappings={"temp": "s1"}
        )
        result = validate_configuration(control, configured, machine)
        assert result.codes() == ["InvalidParamValue", "UnknownParam"]

    def test_validation_is_idempotent(self, control, machine):
        configured = ConfiguredControl(is_active=True, sensor_mappings={})
        first = validate_configuration(control, configured, machine)
        second = validate_configuration(control, configured, machine)
        assert first == second
        assert configured.sensor_mappings == {}

    def test_derived_variable_needs_no_mapping(self, definitions):
        control = definitions["control-002"]
        pump = Machine(
            id="p",
            name="Pompe",
            type="Pompe Hydraulique",
            available_sensors=[AvailableSensor(id="e", name="Elec", provides=["tension", "courant"])],
        )
        configured = ConfiguredControl(sensor_mappings={"tension": "e", "courant": "e"})
        assert validate_configuration(control, configured, pump).ok

    def test_partial_check_tolerates_incomplete(self, control, machine):
        result = check_configuration(control, ConfiguredControl(), machine, complete=False)
        assert result.ok


class TestApplicableControls:
    def test_filters_on_machine_type(self, definitions, forest):
        machine = find_machine(forest, "machine-compresseur-c1").asset
        ids = [c.id for c in applicable_controls(definitions.values(), machine)]
        assert ids == ["control-002", "control-003"]

    def test_empty_type_list_applies_everywhere(self, control, machine):
        assert applicable_controls([control], machine) == [control]

    def test_type_match_is_case_insensitive(self, definitions, machine):
        frigo = machine.model_copy(update={"type": "frigo"})
        ids = [c.id for c in applicable_controls(definitions.values(), frigo)]
        assert ids == ["control-001"]
