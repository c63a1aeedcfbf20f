"""Pydantic request/response bodies for the asset and machine-control API."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from capnio.core.activation import ControlState
from capnio.schemas.assets import (
    ActiveControlInAlert,
    AvailableSensor,
    ConfiguredControl,
    ControlDefinition,
    CurrentValue,
    Machine,
    ParamValue,
    Sensor,
    Site,
    Status,
    Zone,
)

AnyAsset = Annotated[Site | Zone | Machine | Sensor, Field(discriminator="kind")]


# --- Navigation Schemas ---


class BreadcrumbItem(BaseModel):
    id: str
    name: str
    kind: str


class ResolvedPathResponse(BaseModel):
    asset: Annotated[Site | Zone, Field(discriminator="kind")]
    breadcrumb: list[BreadcrumbItem]


class AssetResponse(BaseModel):
    """An asset with the breadcrumb of its ancestors (asset itself last)."""

    model_config = ConfigDict(populate_by_name=True)

    asset: AnyAsset
    parent_id: str | None = Field(default=None, serialization_alias="parentId")
    breadcrumb: list[BreadcrumbItem]


# --- Asset Creation Schemas ---


class SiteCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    location: str = ""
    parent_site_id: str | None = Field(default=None, alias="parentSiteId")
    is_conceptual_sub_site: bool = Field(default=False, alias="isConceptualSubSite")


class ZoneCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    zone_type_id: str | None = Field(default=None, alias="zoneTypeId")
    parent_zone_id: str | None = Field(default=None, alias="parentZoneId")


class MachineCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    status: Status = Status.WHITE
    model: str | None = None
    notes: str | None = None
    available_sensors: list[AvailableSensor] = Field(
        default_factory=list, alias="availableSensors"
    )


class SensorCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    type_model: str = Field(..., alias="typeModel")
    scope: str = Field(default="zone", pattern="^(zone|machine)$")
    affected_machine_ids: list[str] = Field(default_factory=list, alias="affectedMachineIds")
    # Defaults to the variables mapped by the sensor type when empty
    provides: list[str] = Field(default_factory=list)
    status: Status | None = None


# --- Machine Control Schemas ---


class MachineControlView(BaseModel):
    """One applicable control as seen from a machine's configuration page."""

    model_config = ConfigDict(populate_by_name=True)

    control: ControlDefinition
    state: ControlState
    configuration: ConfiguredControl | None = None
    # variable -> sensors able to feed it
    candidates: dict[str, list[AvailableSensor]] = Field(default_factory=dict)
    derived_variables: list[str] = Field(
        default_factory=list, serialization_alias="derivedVariables"
    )


class MachineControlsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    machine_id: str = Field(serialization_alias="machineId")
    machine_name: str = Field(serialization_alias="machineName")
    machine_type: str = Field(serialization_alias="machineType")
    available_sensors: list[AvailableSensor] = Field(serialization_alias="availableSensors")
    alert: ActiveControlInAlert | None = None
    controls: list[MachineControlView]


class ControlConfigurationResponse(BaseModel):
    """Resolved configuration after a successful save."""

    model_config = ConfigDict(populate_by_name=True)

    machine_id: str = Field(serialization_alias="machineId")
    control_id: str = Field(serialization_alias="controlId")
    state: ControlState
    configuration: ConfiguredControl


class AlertRaise(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alert_details: str = Field(default="", alias="alertDetails")
    status: Status = Status.RED
    current_values: dict[str, CurrentValue] = Field(default_factory=dict, alias="currentValues")
    thresholds: dict[str, ParamValue] = Field(default_factory=dict)
    relevant_sensor_variable: str | None = Field(default=None, alias="relevantSensorVariable")


class AlertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    machine_id: str = Field(serialization_alias="machineId")
    alert: ActiveControlInAlert | None = None
    # Alert that was replaced or cleared by this call
    evicted: ActiveControlInAlert | None = None
