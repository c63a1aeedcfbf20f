"""Machine models."""

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from capnio.database import Base


class Machine(Base):
    """Monitored machine. Its status is stored; zone and site statuses are derived."""

    __tablename__ = "machines"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    zone_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("zones.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="white")
    model: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class MachineSensor(Base):
    """Sensor instance a machine can map control variables to."""

    __tablename__ = "machine_sensors"

    machine_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("machines.id"), primary_key=True
    )
    sensor_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    provides: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
