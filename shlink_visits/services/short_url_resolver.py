"""
Service resolving short codes to internal short URL ids
"""

import logging
from typing import Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from shlink_visits.models import Domain, ShortUrl

logger = logging.getLogger(__name__)


class ShortUrlResolver:
    """Looks up short URLs by short code and optional domain"""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, short_code: str, domain: Optional[str] = None) -> Optional[int]:
        """
        Resolve short code to the id of its ShortUrl

        A short URL on the requested domain wins over one on the default
        domain (no domain) sharing the same short code.

        Args:
            short_code: The short code to resolve
            domain: Optional domain authority for multi-domain support

        Returns:
            ShortUrl id or None if not found
        """
        query = select(ShortUrl.id).where(ShortUrl.short_code == short_code)

        if domain is not None:
            query = (
                query.outerjoin(Domain, ShortUrl.domain_id == Domain.id)
                .where(or_(Domain.authority == domain, ShortUrl.domain_id.is_(None)))
                .order_by(ShortUrl.domain_id.is_(None))
            )
        else:
            query = query.where(ShortUrl.domain_id.is_(None))

        result = self.db.execute(query.limit(1)).scalars().first()

        if result is not None:
            logger.info(f"Resolved short_code={short_code} to short_url_id={result}")
        else:
            logger.warning(f"Short code not found: {short_code}")

        return result
