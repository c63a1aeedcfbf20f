"""Per-machine control lifecycle.

A (machine, control) pair is Unconfigured, Configured-Inactive,
Configured-Active or Active-Alerting. A control only becomes active after its
configuration validates, and a machine carries at most one alerting control.
Functions mutate the given Machine in place and leave it untouched on refusal.
"""

from enum import Enum

from capnio.core.formula import mapped_variables
from capnio.core.mapping import (
    ValidationResult,
    check_configuration,
    is_applicable,
    validate_configuration,
)
from capnio.errors import ControlNotApplicable, ControlValidationError, InvalidTransition
from capnio.schemas.assets import (
    ActiveControlInAlert,
    ConfiguredControl,
    ControlDefinition,
    Machine,
)


class ControlState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED_INACTIVE = "configured_inactive"
    CONFIGURED_ACTIVE = "configured_active"
    ACTIVE_ALERTING = "active_alerting"


ACTIVE_STATES = (ControlState.CONFIGURED_ACTIVE, ControlState.ACTIVE_ALERTING)


def control_state(machine: Machine, control_id: str) -> ControlState:
    configured = machine.configured_controls.get(control_id)
    if configured is None:
        return ControlState.UNCONFIGURED
    if not configured.is_active:
        return ControlState.CONFIGURED_INACTIVE
    alert = machine.active_control_in_alert
    if alert is not None and alert.control_id == control_id:
        return ControlState.ACTIVE_ALERTING
    return ControlState.CONFIGURED_ACTIVE


def _ensure_applicable(machine: Machine, control: ControlDefinition) -> None:
    if not is_applicable(control, machine):
        raise ControlNotApplicable(control.id, machine.type)


def _clear_if_alerting(machine: Machine, control_id: str) -> ActiveControlInAlert | None:
    alert = machine.active_control_in_alert
    if alert is not None and alert.control_id == control_id:
        machine.active_control_in_alert = None
        return alert
    return None


def apply_configuration(
    machine: Machine,
    control: ControlDefinition,
    configured: ConfiguredControl,
) -> tuple[ConfiguredControl, ValidationResult]:
    """Store params, mappings and the requested active flag in one step.

    Activating (or keeping active) requires full validation. Storing an
    inactive configuration only checks the values that are present, and
    deactivation clears the machine alert if this control raised it.
    """
    _ensure_applicable(machine, control)
    result = check_configuration(control, configured, machine, complete=configured.is_active)
    if not result.ok:
        raise ControlValidationError(result)

    stored = result.resolved(configured.is_active)
    machine.configured_controls[control.id] = stored
    if not stored.is_active:
        _clear_if_alerting(machine, control.id)
    return stored, result


def configure(
    machine: Machine,
    control: ControlDefinition,
    params: dict | None = None,
    sensor_mappings: dict[str, str] | None = None,
) -> ConfiguredControl:
    """Edit params and/or mappings without touching the active flag."""
    current = machine.configured_controls.get(control.id) or ConfiguredControl()
    candidate = ConfiguredControl(
        is_active=current.is_active,
        params=dict(current.params if params is None else params),
        sensor_mappings=dict(current.sensor_mappings if sensor_mappings is None else sensor_mappings),
    )
    stored, _ = apply_configuration(machine, control, candidate)
    return stored


def set_active(machine: Machine, control: ControlDefinition, active: bool) -> ValidationResult:
    """Toggle a control. Activation is refused (state retained) unless validation passes."""
    current = machine.configured_controls.get(control.id) or ConfiguredControl()

    if active:
        _ensure_applicable(machine, control)
        result = validate_configuration(control, current, machine)
        if not result.ok:
            raise ControlValidationError(result)
        machine.configured_controls[control.id] = result.resolved(True)
        return result

    machine.configured_controls[control.id] = current.model_copy(update={"is_active": False})
    _clear_if_alerting(machine, control.id)
    return ValidationResult(params=dict(current.params), sensor_mappings=dict(current.sensor_mappings))


def raise_alert(
    machine: Machine,
    control: ControlDefinition,
    alert: ActiveControlInAlert | None = None,
) -> ActiveControlInAlert | None:
    """Make ``control`` the machine's alerting control.

    Only an active control can alert. Any other control currently alerting is
    evicted and returned.
    """
    state = control_state(machine, control.id)
    if state not in ACTIVE_STATES:
        raise InvalidTransition(
            f"Control {control.id} is {state.value} on machine {machine.id}; only active controls can alert"
        )

    if alert is None:
        alert = ActiveControlInAlert(control_id=control.id)
    alert = alert.model_copy(
        update={
            "control_id": control.id,
            "control_name": alert.control_name or control.name,
            "formula_used": alert.formula_used or control.verification_formula,
            "checklist": alert.checklist or list(control.checklist),
        }
    )
    if not alert.thresholds:
        alert.thresholds = dict(machine.configured_controls[control.id].params)

    previous = machine.active_control_in_alert
    machine.active_control_in_alert = alert
    if previous is not None and previous.control_id != control.id:
        return previous
    return None


def clear_alert(machine: Machine) -> ActiveControlInAlert | None:
    """Remove the machine's alert; returns what was cleared."""
    previous = machine.active_control_in_alert
    machine.active_control_in_alert = None
    return previous


def reconcile(
    machine: Machine, control: ControlDefinition
) -> tuple[ConfiguredControl | None, ActiveControlInAlert | None]:
    """Bring a stored configuration in line with an edited control definition.

    Params the definition no longer declares and mappings of variables it no
    longer maps are dropped. An active control that no longer applies to the
    machine or no longer validates is switched off. Returns the configuration
    (None when unconfigured) and the alert cleared along the way, if any.
    """
    current = machine.configured_controls.get(control.id)
    if current is None:
        return None, None

    wanted = {v.casefold() for v in mapped_variables(control)}
    pruned = ConfiguredControl(
        is_active=current.is_active,
        params={k: v for k, v in current.params.items() if control.param(k) is not None},
        sensor_mappings={
            k: s for k, s in current.sensor_mappings.items() if k.strip().casefold() in wanted
        },
    )
    if pruned.is_active:
        result = validate_configuration(control, pruned, machine)
        if result.ok and is_applicable(control, machine):
            pruned = result.resolved(True)
        else:
            pruned.is_active = False

    machine.configured_controls[control.id] = pruned
    cleared = None if pruned.is_active else _clear_if_alerting(machine, control.id)
    return pruned, cleared
