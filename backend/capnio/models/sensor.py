"""Sensor model."""

from sqlalchemy import JSON, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from capnio.database import Base


class Sensor(Base):
    """Sensor installed in a zone, ambient or attached to some of its machines."""

    __tablename__ = "sensors"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    zone_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("zones.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type_model: Mapped[str] = mapped_column(String(200), nullable=False)
    scope: Mapped[str] = mapped_column(String(10), nullable=False, default="zone")
    affected_machine_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    provides: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str | None] = mapped_column(String(10), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
