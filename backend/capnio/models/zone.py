"""Zone model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from capnio.database import Base


class Zone(Base):
    """Zone of a site (kitchen, cold room...). Sub-zones point to their parent zone."""

    __tablename__ = "zones"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    site_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("sites.id"), nullable=False, index=True
    )
    parent_zone_id: Mapped[str | None] = mapped_column(
        String(100), ForeignKey("zones.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    zone_type_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
