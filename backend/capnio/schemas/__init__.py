"""Pydantic schemas for the domain model and API request/response bodies."""

from capnio.schemas.assets import (
    ActiveControlInAlert,
    Asset,
    AvailableSensor,
    ConfiguredControl,
    ControlDefinition,
    ControlParameter,
    CurrentValue,
    Machine,
    ParamValue,
    Sensor,
    Site,
    Status,
    Zone,
)
from capnio.schemas.catalog import (
    ControlDefinitionDraft,
    MachineTypeDraft,
    MachineTypeInfo,
    RegistryResponse,
    SensorCategoryInfo,
    SensorTypeDraft,
    SensorTypeInfo,
    SystemVariableInfo,
    ZoneTypeDraft,
    ZoneTypeInfo,
)

__all__ = [
    # Asset schemas
    "Status",
    "Site",
    "Zone",
    "Machine",
    "Sensor",
    "Asset",
    "AvailableSensor",
    "ParamValue",
    # Control schemas
    "ControlDefinition",
    "ControlParameter",
    "ConfiguredControl",
    "ActiveControlInAlert",
    "CurrentValue",
    # Catalog schemas
    "ControlDefinitionDraft",
    "SensorTypeDraft",
    "SensorTypeInfo",
    "MachineTypeDraft",
    "MachineTypeInfo",
    "ZoneTypeDraft",
    "ZoneTypeInfo",
    "SystemVariableInfo",
    "SensorCategoryInfo",
    "RegistryResponse",
]
