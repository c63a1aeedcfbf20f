"""Pydantic schemas for the admin catalog (controls, sensor/machine/zone types)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from capnio.schemas.assets import ControlDefinition


class ControlDefinitionDraft(ControlDefinition):
    """Control definition as submitted by the admin form; the id may be generated."""

    id: str | None = None


# --- Sensor Type Schemas ---


class SensorTypeDraft(BaseModel):
    """Sensor type declaration: payload keys mapped to canonical system variables."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    categories: list[str] = Field(..., min_length=1)
    key_mappings: dict[str, str] = Field(default_factory=dict, alias="keyMappings")
    description: str = ""
    example_payload: dict[str, Any] | None = Field(default=None, alias="examplePayload")


class SensorTypeInfo(SensorTypeDraft):
    id: str
    # Variables the mapped payload keys feed
    provides: list[str] = Field(default_factory=list)


# --- Machine / Zone Type Schemas ---


class MachineTypeDraft(BaseModel):
    id: str | None = None
    name: str = Field(..., min_length=1)
    description: str = ""


class MachineTypeInfo(MachineTypeDraft):
    id: str


class ZoneTypeDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = Field(..., min_length=1)
    description: str = ""
    best_practices: str = Field(default="", alias="bestPractices")


class ZoneTypeInfo(ZoneTypeDraft):
    id: str


# --- Registry Schemas ---


class SystemVariableInfo(BaseModel):
    id: str
    label: str
    category: str | None = None


class SensorCategoryInfo(BaseModel):
    id: str
    label: str


class RegistryResponse(BaseModel):
    """Canonical system variables and general sensor categories."""

    variables: list[SystemVariableInfo]
    categories: list[SensorCategoryInfo]
