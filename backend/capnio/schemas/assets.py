"""Pydantic schemas for the asset hierarchy and per-machine control configuration.

Field aliases carry the camelCase names used by the web console; snake_case
names are accepted on input as well.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ParamValue = bool | int | float | str


class Status(str, Enum):
    """Health of an asset. ``white`` means no data or not configured."""

    GREEN = "green"
    ORANGE = "orange"
    RED = "red"
    WHITE = "white"


# --- Control Schemas ---


class ControlParameter(BaseModel):
    """A parameter a control expects each machine to provide (threshold, flag...)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    type: Literal["number", "string", "boolean"] = "number"
    default_value: ParamValue | None = Field(default=None, alias="defaultValue")


class ControlDefinition(BaseModel):
    """Admin-authored control shared by all clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    applicable_machine_types: list[str] = Field(
        default_factory=list, alias="applicableMachineTypes"
    )
    required_sensor_categories: list[str] = Field(
        default_factory=list, alias="requiredSensorCategories"
    )
    variables: list[str] = Field(default_factory=list, alias="variablesUtilisees")
    calculation_formula: str | None = Field(default=None, alias="calculationFormula")
    verification_formula: str = Field(alias="verificationFormula")
    description: str = ""
    expected_params: list[ControlParameter] = Field(default_factory=list, alias="expectedParams")
    checklist: list[str] = Field(default_factory=list)

    def param(self, param_id: str) -> ControlParameter | None:
        return next((p for p in self.expected_params if p.id == param_id), None)


class ConfiguredControl(BaseModel):
    """Per-machine instantiation of a ControlDefinition."""

    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(default=False, alias="isActive")
    params: dict[str, ParamValue | None] = Field(default_factory=dict)
    # variable name -> sensor instance id ("" means unmapped)
    sensor_mappings: dict[str, str] = Field(default_factory=dict, alias="sensorMappings")


class CurrentValue(BaseModel):
    value: float | str
    unit: str | None = None


class ActiveControlInAlert(BaseModel):
    """The alert a machine is currently raising, if any."""

    model_config = ConfigDict(populate_by_name=True)

    control_id: str = Field(alias="controlId")
    control_name: str = Field(default="", alias="controlName")
    alert_details: str = Field(default="", alias="alertDetails")
    status: Status = Status.RED
    formula_used: str | None = Field(default=None, alias="formulaUsed")
    current_values: dict[str, CurrentValue] = Field(default_factory=dict, alias="currentValues")
    thresholds: dict[str, ParamValue] = Field(default_factory=dict)
    relevant_sensor_variable: str | None = Field(default=None, alias="relevantSensorVariable")
    checklist: list[str] = Field(default_factory=list)


# --- Asset Schemas ---


class AvailableSensor(BaseModel):
    """A sensor instance a machine can map control variables to."""

    id: str
    name: str
    provides: list[str] = Field(default_factory=list)


class Machine(BaseModel):
    """Leaf asset. Its status is a source fact, never derived."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["machine"] = "machine"
    id: str
    name: str
    type: str
    status: Status = Status.WHITE
    model: str | None = None
    notes: str | None = None
    active_control_in_alert: ActiveControlInAlert | None = Field(
        default=None, alias="activeControlInAlert"
    )
    available_sensors: list[AvailableSensor] = Field(
        default_factory=list, alias="availableSensors"
    )
    configured_controls: dict[str, ConfiguredControl] = Field(
        default_factory=dict, alias="configuredControls"
    )


class Sensor(BaseModel):
    """A sensor installed in a zone, either ambient or attached to machines."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["sensor"] = "sensor"
    id: str
    name: str
    type_model: str = Field(alias="typeModel")
    scope: Literal["zone", "machine"] = "zone"
    affected_machine_ids: list[str] = Field(default_factory=list, alias="affectedMachineIds")
    provides: list[str] = Field(default_factory=list)
    status: Status | None = None

    @model_validator(mode="after")
    def _machine_scope_needs_machines(self) -> "Sensor":
        if self.scope == "machine" and not self.affected_machine_ids:
            raise ValueError(f"sensor {self.id} has machine scope but no affected machines")
        return self


class Zone(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["zone"] = "zone"
    id: str
    name: str
    zone_type_id: str | None = Field(default=None, alias="zoneTypeId")
    machines: list[Machine] = Field(default_factory=list)
    sensors: list[Sensor] = Field(default_factory=list)
    sub_zones: list["Zone"] = Field(default_factory=list, alias="subZones")
    # Derived on read, never stored
    status: Status | None = None

    @model_validator(mode="after")
    def _sensors_affect_local_machines(self) -> "Zone":
        machine_ids = {m.id for m in self.machines}
        for sensor in self.sensors:
            foreign = [mid for mid in sensor.affected_machine_ids if mid not in machine_ids]
            if foreign:
                raise ValueError(
                    f"sensor {sensor.id} affects machines outside zone {self.id}: {foreign}"
                )
        return self


class Site(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["site"] = "site"
    id: str
    name: str
    location: str = ""
    zones: list[Zone] = Field(default_factory=list)
    sub_sites: list["Site"] = Field(default_factory=list, alias="subSites")
    is_conceptual_sub_site: bool = Field(default=False, alias="isConceptualSubSite")
    # Derived on read, never stored
    status: Status | None = None

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("site id must not be blank")
        return value


Asset = Site | Zone | Machine | Sensor
