"""Variable-to-sensor mapping and configuration validation for machine controls."""

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, Field

from capnio.core.formula import mapped_variables, value_matches_type
from capnio.schemas.assets import (
    AvailableSensor,
    ConfiguredControl,
    ControlDefinition,
    ControlParameter,
    Machine,
    ParamValue,
    Zone,
)

IssueCode = Literal[
    "MissingRequiredParam",
    "UnmappedVariable",
    "IncompatibleSensor",
    "UnknownParam",
    "InvalidParamValue",
]

AMBIENT_SUFFIX = " (Ambiant)"


class ValidationIssue(BaseModel):
    code: IssueCode
    subject: str  # parameter id or variable name
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating a configuration, with defaults and mappings resolved."""

    issues: list[ValidationIssue] = Field(default_factory=list)
    params: dict[str, ParamValue] = Field(default_factory=dict)
    sensor_mappings: dict[str, str] = Field(default_factory=dict, serialization_alias="sensorMappings")

    @property
    def ok(self) -> bool:
        return not self.issues

    def codes(self) -> list[str]:
        return [issue.code for issue in self.issues]

    def resolved(self, is_active: bool) -> ConfiguredControl:
        return ConfiguredControl(
            is_active=is_active,
            params=dict(self.params),
            sensor_mappings=dict(self.sensor_mappings),
        )


def _norm(token: str) -> str:
    return token.strip().casefold()


def provides_variable(sensor: AvailableSensor, variable: str) -> bool:
    wanted = _norm(variable)
    return any(_norm(p) == wanted for p in sensor.provides)


def compatible_sensors(machine: Machine, variable: str) -> list[AvailableSensor]:
    """Sensors available to the machine whose provides list contains the variable."""
    return [s for s in machine.available_sensors if provides_variable(s, variable)]


def candidate_sensors(machine: Machine, zone: Zone | None) -> list[AvailableSensor]:
    """Sensors a machine can map to.

    Declared available sensors win. Without them, fall back to the zone's
    sensors attached to this machine followed by the zone's ambient sensors.
    """
    if machine.available_sensors or zone is None:
        return list(machine.available_sensors)
    attached = [
        AvailableSensor(id=s.id, name=s.name, provides=list(s.provides))
        for s in zone.sensors
        if s.scope == "machine" and machine.id in s.affected_machine_ids
    ]
    ambient = [
        AvailableSensor(id=s.id, name=f"{s.name}{AMBIENT_SUFFIX}", provides=list(s.provides))
        for s in zone.sensors
        if s.scope == "zone"
    ]
    return attached + ambient


def with_candidate_sensors(machine: Machine, zone: Zone | None) -> Machine:
    """Copy of the machine whose available sensors include the zone fallback."""
    if machine.available_sensors:
        return machine
    return machine.model_copy(update={"available_sensors": candidate_sensors(machine, zone)})


def is_applicable(control: ControlDefinition, machine: Machine) -> bool:
    """An empty machine-type list means the control applies to every machine."""
    if not control.applicable_machine_types:
        return True
    wanted = _norm(machine.type)
    return any(_norm(t) == wanted for t in control.applicable_machine_types)


def applicable_controls(
    definitions: Iterable[ControlDefinition], machine: Machine
) -> list[ControlDefinition]:
    return [c for c in definitions if is_applicable(c, machine)]


def validate_configuration(
    control: ControlDefinition,
    configured: ConfiguredControl,
    machine: Machine,
) -> ValidationResult:
    """Validate a configuration before it may be activated.

    Every expected parameter must be set or have a default, every required
    variable must be mapped, and every mapped sensor must provide its variable.
    Pure: validating the same triple twice gives the same result.
    """
    return check_configuration(control, configured, machine, complete=True)


def check_configuration(
    control: ControlDefinition,
    configured: ConfiguredControl,
    machine: Machine,
    complete: bool,
) -> ValidationResult:
    """Shared validation. With ``complete=False`` unset params and unmapped
    variables are tolerated; only values that are present are checked."""
    issues: list[ValidationIssue] = []
    params = _resolve_params(control, configured, complete, issues)
    mappings = _resolve_mappings(control, configured, machine, complete, issues)
    return ValidationResult(issues=issues, params=params, sensor_mappings=mappings)


def _resolve_params(
    control: ControlDefinition,
    configured: ConfiguredControl,
    complete: bool,
    issues: list[ValidationIssue],
) -> dict[str, ParamValue]:
    resolved: dict[str, ParamValue] = {}

    for param in control.expected_params:
        value = configured.params.get(param.id)
        if value is None or value == "":
            if param.default_value is not None:
                resolved[param.id] = param.default_value
            elif complete:
                issues.append(
                    ValidationIssue(
                        code="MissingRequiredParam",
                        subject=param.id,
                        message=f"Parameter {param.id!r} ({param.label}) is required",
                    )
                )
            continue

        coerced = _coerce(value, param)
        if coerced is None:
            issues.append(
                ValidationIssue(
                    code="InvalidParamValue",
                    subject=param.id,
                    message=f"Parameter {param.id!r} expects a {param.type}, got {value!r}",
                )
            )
            continue
        resolved[param.id] = coerced

    for key in configured.params:
        if control.param(key) is None:
            issues.append(
                ValidationIssue(
                    code="UnknownParam",
                    subject=key,
                    message=f"Parameter {key!r} is not expected by control {control.id}",
                )
            )

    return resolved


def _coerce(value: ParamValue, param: ControlParameter) -> ParamValue | None:
    if value_matches_type(value, param.type):
        return value
    # Numbers typed into a form arrive as text
    if param.type == "number" and isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _resolve_mappings(
    control: ControlDefinition,
    configured: ConfiguredControl,
    machine: Machine,
    complete: bool,
    issues: list[ValidationIssue],
) -> dict[str, str]:
    resolved: dict[str, str] = {}
    sensors = {s.id: s for s in machine.available_sensors}
    required = mapped_variables(control)

    # Keys are matched to the declared variable names regardless of case
    declared = {_norm(v): v for v in control.variables}
    mappings: dict[str, str] = {}
    for key, sensor_id in configured.sensor_mappings.items():
        variable = declared.get(_norm(key), key)
        if sensor_id or variable not in mappings:
            mappings[variable] = sensor_id

    for variable in required:
        if not mappings.get(variable) and complete:
            issues.append(
                ValidationIssue(
                    code="UnmappedVariable",
                    subject=variable,
                    message=f"Variable {variable!r} is not mapped to a sensor",
                )
            )

    for variable, sensor_id in mappings.items():
        if not sensor_id:
            continue
        sensor = sensors.get(sensor_id)
        if sensor is None or not provides_variable(sensor, variable):
            issues.append(
                ValidationIssue(
                    code="IncompatibleSensor",
                    subject=variable,
                    message=f"Sensor {sensor_id!r} does not provide {variable!r} on machine {machine.id}",
                )
            )
            continue
        resolved[variable] = sensor_id

    return resolved
