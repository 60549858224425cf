from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntId

if TYPE_CHECKING:
    from .short_url import ShortUrl


class Domain(Base):
    """Existing domains table (READ-ONLY)"""

    __tablename__ = "domains"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    authority: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)

    short_urls: Mapped[list["ShortUrl"]] = relationship(
        "ShortUrl", back_populates="domain"
    )
