"""Control definition and per-machine control state models."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from capnio.database import Base


class ControlDefinition(Base):
    """Admin-authored control shared across clients."""

    __tablename__ = "control_definitions"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    applicable_machine_types: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    required_sensor_categories: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    variables: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    calculation_formula: Mapped[str | None] = mapped_column(Text, nullable=True)
    verification_formula: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Serialized ControlParameter dicts
    expected_params: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    checklist: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ConfiguredControl(Base):
    """Per-machine configuration of a control. One row per (machine, control)."""

    __tablename__ = "configured_controls"

    machine_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("machines.id"), primary_key=True
    )
    control_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    params: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    sensor_mappings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class MachineAlert(Base):
    """The control currently alerting on a machine. Keyed by machine: one alert at most."""

    __tablename__ = "machine_alerts"

    machine_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("machines.id"), primary_key=True
    )
    control_id: Mapped[str] = mapped_column(String(100), nullable=False)
    # Serialized ActiveControlInAlert
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    raised_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
