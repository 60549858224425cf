from typing import TYPE_CHECKING, Optional
from sqlalchemy import Double, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, BigIntId

if TYPE_CHECKING:
    from .visit import Visit


class VisitLocation(Base):
    """Visit locations table (Read Only)"""

    __tablename__ = "visit_locations"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    country_code: Mapped[Optional[str]] = mapped_column(String(255))
    country_name: Mapped[Optional[str]] = mapped_column(String(255))
    region_name: Mapped[Optional[str]] = mapped_column(String(255))
    city_name: Mapped[Optional[str]] = mapped_column(String(255))
    timezone: Mapped[Optional[str]] = mapped_column(String(255))
    lat: Mapped[float] = mapped_column(Double(), nullable=False, default=0.0)
    lon: Mapped[float] = mapped_column(Double(), nullable=False, default=0.0)
    # Lookup was attempted but produced no geographic data
    is_empty: Mapped[bool] = mapped_column(nullable=False, default=False)

    visit: Mapped[Optional["Visit"]] = relationship(
        "Visit", back_populates="location", uselist=False
    )
