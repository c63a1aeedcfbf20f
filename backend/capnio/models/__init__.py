"""SQLAlchemy models."""

from capnio.models.catalog import MachineType, SensorType, ZoneType
from capnio.models.control import ConfiguredControl, ControlDefinition, MachineAlert
from capnio.models.machine import Machine, MachineSensor
from capnio.models.sensor import Sensor
from capnio.models.site import Site
from capnio.models.zone import Zone

__all__ = [
    "Site",
    "Zone",
    "Machine",
    "MachineSensor",
    "Sensor",
    "ControlDefinition",
    "ConfiguredControl",
    "MachineAlert",
    "SensorType",
    "MachineType",
    "ZoneType",
]
