"""Tests for the control activation lifecycle and the single-alert rule."""

import pytest

from capnio.core.activation import (
    ControlState,
    apply_configuration,
    clear_alert,
    configure,
    control_state,
    raise_alert,
    reconcile,
    set_active,
)
from capnio.core.hierarchy import find_machine
from capnio.errors import ControlNotApplicable, ControlValidationError, InvalidTransition
from capnio.schemas import (
    ActiveControlInAlert,
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
        checklist=["Vérifier la porte."],
    )


@pytest.fixture
def other_control():
    return ControlDefinition(
        id="c2",
        name="Contrôle Humidité",
        variables=["hum"],
        verification_formula="sensor['hum'].value <= 80",
    )


@pytest.fixture
def machine():
    return Machine(
        id="m1",
        name="Frigo 1",
        type="Frigo",
        available_sensors=[AvailableSensor(id="s1", name="Sonde", provides=["temp", "hum"])],
    )


def _activate(machine, control, mapping):
    configure(machine, control, sensor_mappings=mapping)
    set_active(machine, control, True)


class TestTransitions:
    def test_unconfigured_by_default(self, machine, control):
        assert control_state(machine, "c1") == ControlState.UNCONFIGURED

    def test_configure_keeps_control_inactive(self, machine, control):
        configure(machine, control, sensor_mappings={"temp": "s1"})
        assert control_state(machine, "c1") == ControlState.CONFIGURED_INACTIVE

    def test_activation_applies_defaults(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        assert control_state(machine, "c1") == ControlState.CONFIGURED_ACTIVE
        assert machine.configured_controls["c1"].params == {"seuil_max": 5}

    def test_refused_activation_keeps_flag(self, machine, control):
        configure(machine, control, params={"seuil_max": 3})
        with pytest.raises(ControlValidationError) as exc_info:
            set_active(machine, control, True)
        assert exc_info.value.code == "UnmappedVariable"
        assert machine.configured_controls["c1"].is_active is False

    def test_refused_put_leaves_machine_unchanged(self, machine, control):
        with pytest.raises(ControlValidationError):
            apply_configuration(machine, control, ConfiguredControl(is_active=True))
        assert control_state(machine, "c1") == ControlState.UNCONFIGURED

    def test_editing_active_control_requires_validity(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        with pytest.raises(ControlValidationError):
            configure(machine, control, sensor_mappings={})
        assert machine.configured_controls["c1"].sensor_mappings == {"temp": "s1"}
        assert machine.configured_controls["c1"].is_active is True

    def test_inactive_save_rejects_incompatible_sensor(self, machine, control):
        with pytest.raises(ControlValidationError) as exc_info:
            apply_configuration(machine, control, ConfiguredControl(sensor_mappings={"temp": "ghost"}))
        assert exc_info.value.code == "IncompatibleSensor"

    def test_not_applicable(self, machine, control):
        control = control.model_copy(update={"applicable_machine_types": ["Compresseur"]})
        with pytest.raises(ControlNotApplicable):
            configure(machine, control, sensor_mappings={"temp": "s1"})

    def test_deactivating_unconfigured_control(self, machine, control):
        set_active(machine, control, False)
        assert control_state(machine, "c1") == ControlState.CONFIGURED_INACTIVE

    def test_demo_machine_activation_with_zone_sensor(self, forest, definitions):
        """A machine without declared sensors can map to its zone's attached sensor."""
        from capnio.core.mapping import with_candidate_sensors

        located = find_machine(forest, "machine-lyon-frigo1")
        machine = with_candidate_sensors(located.asset, located.zone)
        stored, _ = apply_configuration(
            machine,
            definitions["control-001"],
            ConfiguredControl(is_active=True, sensor_mappings={"temp": "sensor-lyon-frigo1-temp"}),
        )
        assert stored.is_active
        assert stored.params == {"seuil_min": 0, "seuil_max": 5}


class TestAlerts:
    def test_inactive_control_cannot_alert(self, machine, control):
        configure(machine, control, sensor_mappings={"temp": "s1"})
        with pytest.raises(InvalidTransition):
            raise_alert(machine, control)
        assert machine.active_control_in_alert is None

    def test_alert_fills_control_details(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        evicted = raise_alert(machine, control, ActiveControlInAlert(control_id="c1", alert_details="6°C"))
        assert evicted is None
        alert = machine.active_control_in_alert
        assert alert.control_name == "Contrôle Température"
        assert alert.formula_used == control.verification_formula
        assert alert.checklist == ["Vérifier la porte."]
        assert alert.thresholds == {"seuil_max": 5}
        assert control_state(machine, "c1") == ControlState.ACTIVE_ALERTING

    def test_single_alert_per_machine(self, machine, control, other_control):
        _activate(machine, control, {"temp": "s1"})
        _activate(machine, other_control, {"hum": "s1"})
        raise_alert(machine, control)
        evicted = raise_alert(machine, other_control)
        assert evicted.control_id == "c1"
        assert machine.active_control_in_alert.control_id == "c2"
        assert control_state(machine, "c1") == ControlState.CONFIGURED_ACTIVE
        assert control_state(machine, "c2") == ControlState.ACTIVE_ALERTING

    def test_deactivation_clears_own_alert(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        raise_alert(machine, control)
        set_active(machine, control, False)
        assert machine.active_control_in_alert is None
        assert control_state(machine, "c1") == ControlState.CONFIGURED_INACTIVE

    def test_deactivating_other_control_keeps_alert(self, machine, control, other_control):
        _activate(machine, control, {"temp": "s1"})
        _activate(machine, other_control, {"hum": "s1"})
        raise_alert(machine, control)
        set_active(machine, other_control, False)
        assert machine.active_control_in_alert.control_id == "c1"

    def test_clear_alert(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        raise_alert(machine, control)
        cleared = clear_alert(machine)
        assert cleared.control_id == "c1"
        assert clear_alert(machine) is None


class TestReconcile:
    def test_unconfigured_control_is_left_alone(self, machine, control):
        assert reconcile(machine, control) == (None, None)
        assert control.id not in machine.configured_controls

    def test_new_required_param_switches_control_off(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        raise_alert(machine, control)
        edited = control.model_copy(
            update={
                "expected_params": [
                    *control.expected_params,
                    ControlParameter(id="seuil_crit", label="Seuil critique"),
                ]
            }
        )

        stored, cleared = reconcile(machine, edited)
        assert not stored.is_active
        assert stored.params == {"seuil_max": 5}
        assert cleared.control_id == "c1"
        assert machine.active_control_in_alert is None

    def test_removed_param_is_dropped_and_new_default_applied(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        edited = control.model_copy(
            update={"expected_params": [ControlParameter(id="seuil_haut", label="Seuil", default_value=8)]}
        )
        stored, cleared = reconcile(machine, edited)
        assert stored.is_active
        assert stored.params == {"seuil_haut": 8}
        assert cleared is None

    def test_no_longer_applicable(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        edited = control.model_copy(update={"applicable_machine_types": ["Four"]})
        stored, _ = reconcile(machine, edited)
        assert not stored.is_active
        assert control_state(machine, "c1") == ControlState.CONFIGURED_INACTIVE

    def test_mapping_of_dropped_variable_is_removed(self, machine, control):
        _activate(machine, control, {"temp": "s1"})
        edited = control.model_copy(
            update={"variables": ["hum"], "verification_formula": "sensor['hum'].value <= machine.params['seuil_max']"}
        )
        stored, _ = reconcile(machine, edited)
        assert stored.sensor_mappings == {}
        assert not stored.is_active
