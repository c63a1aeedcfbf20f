"""Site model."""

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from capnio.database import Base


class Site(Base):
    """Client site (restaurant, warehouse, plant...). Nested sites point to their parent."""

    __tablename__ = "sites"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    parent_site_id: Mapped[str | None] = mapped_column(
        String(100), ForeignKey("sites.id"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    is_conceptual_sub_site: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Sibling ordering
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
