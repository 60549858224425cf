from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntId

if TYPE_CHECKING:
    from .domain import Domain
    from .visit import Visit


class ShortUrl(Base):
    """Existing short_urls table (READ-ONLY)"""

    __tablename__ = "short_urls"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    original_url: Mapped[str] = mapped_column(Text, nullable=False)
    short_code: Mapped[str] = mapped_column(String(255), nullable=False)
    date_created: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    domain_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("domains.id")
    )

    # Relationships
    domain: Mapped[Optional["Domain"]] = relationship(
        "Domain", back_populates="short_urls"
    )
    visits: Mapped[list["Visit"]] = relationship("Visit", back_populates="short_url")

    __table_args__ = (
        Index("unique_short_code_plus_domain", "short_code", "domain_id", unique=True),
        Index("IDX_4A53F934115F0EE5", "domain_id"),
    )
