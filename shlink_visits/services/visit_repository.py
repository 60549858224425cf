"""
Read-only repository for visits: bulk sweeps, paged listings and counts
"""

import logging
from typing import Iterator, List, Optional
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session, contains_eager

from shlink_visits.config import get_settings
from shlink_visits.models import Visit
from shlink_visits.schemas import DateRange, VisitSchema, VisitsPage
from shlink_visits.services.short_url_resolver import ShortUrlResolver
from shlink_visits.services.visit_filters import (
    NO_LIMIT,
    VisitBlockQuery,
    VisitFilter,
    date_range_conditions,
    validate_paging,
)
from shlink_visits.services.visit_iterator import iterate_visits

logger = logging.getLogger(__name__)

# Matches no short URL, so unresolved codes list nothing and count zero
NOT_FOUND_ID = -1


class VisitRepository:
    """Queries over the visits table"""

    def __init__(
        self,
        db: Session,
        resolver: Optional[ShortUrlResolver] = None,
        block_size: Optional[int] = None,
    ):
        self.db = db
        self.resolver = resolver or ShortUrlResolver(db)
        self.block_size = (
            get_settings().visits_block_size if block_size is None else block_size
        )

    # ==================== Bulk sweeps ====================

    def find_unlocated_visits(
        self, block_size: Optional[int] = None
    ) -> Iterator[VisitSchema]:
        """Visits whose location was never resolved"""
        return self._iterate(VisitFilter.UNLOCATED, block_size)

    def find_visits_with_empty_location(
        self, block_size: Optional[int] = None
    ) -> Iterator[VisitSchema]:
        """Visits whose location lookup was attempted but came back empty"""
        return self._iterate(VisitFilter.EMPTY_LOCATION, block_size)

    def find_all_visits(self, block_size: Optional[int] = None) -> Iterator[VisitSchema]:
        return self._iterate(VisitFilter.ALL, block_size)

    def _iterate(
        self, visit_filter: VisitFilter, block_size: Optional[int]
    ) -> Iterator[VisitSchema]:
        # Built here so a bad block size fails before iteration starts
        query = VisitBlockQuery(
            visit_filter=visit_filter,
            block_size=self.block_size if block_size is None else block_size,
        )
        return iterate_visits(self.db, query)

    # ==================== Short code listings ====================

    def find_visits_by_short_code(
        self,
        short_code: str,
        domain: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[VisitSchema]:
        """
        List visits for a short URL, newest first

        Args:
            short_code: Short code of the visited short URL
            domain: Optional domain authority of the short URL
            date_range: Optional inclusive bounds on the visit date
            limit: Maximum visits to return, unbounded when None
            offset: Visits to skip from the newest one, 0 when None

        Returns:
            Decoded visits with their locations attached
        """
        validate_paging(limit, offset)
        short_url_id = self._resolve_short_url_id(short_code, domain)
        return self._find_visits(short_url_id, date_range, limit, offset)

    def count_visits_by_short_code(
        self,
        short_code: str,
        domain: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> int:
        short_url_id = self._resolve_short_url_id(short_code, domain)
        return self._count_visits(short_url_id, date_range)

    def paginate_visits_by_short_code(
        self,
        short_code: str,
        domain: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> VisitsPage:
        """Fetch one page of visits together with the unpaged total"""
        validate_paging(limit, offset)
        short_url_id = self._resolve_short_url_id(short_code, domain)

        return VisitsPage(
            total=self._count_visits(short_url_id, date_range),
            limit=limit,
            offset=offset or 0,
            data=self._find_visits(short_url_id, date_range, limit, offset),
        )

    def _resolve_short_url_id(self, short_code: str, domain: Optional[str]) -> int:
        short_url_id = self.resolver.resolve(short_code, domain)
        return NOT_FOUND_ID if short_url_id is None else short_url_id

    def _visits_conditions(
        self, short_url_id: int, date_range: Optional[DateRange]
    ) -> List[ColumnElement[bool]]:
        return [
            Visit.short_url_id == short_url_id,
            *date_range_conditions(Visit.date, date_range),
        ]

    def _find_visits(
        self,
        short_url_id: int,
        date_range: Optional[DateRange],
        limit: Optional[int],
        offset: Optional[int],
    ) -> List[VisitSchema]:
        # Offset is applied to the narrow id projection only. Joining full rows
        # and locations happens afterwards against at most "limit" ids, so deep
        # offsets do not scan wide rows.
        ids = (
            select(Visit.id)
            .where(*self._visits_conditions(short_url_id, date_range))
            .order_by(Visit.id.desc())
            .limit(NO_LIMIT if limit is None else limit)
            .offset(offset or 0)
            .subquery("sq")
        )
        query = (
            select(Visit)
            .join(ids, ids.c.id == Visit.id)
            .outerjoin(Visit.location)
            .options(contains_eager(Visit.location))
            .order_by(Visit.id.desc())
        )

        visits = self.db.scalars(query).all()
        return [VisitSchema.model_validate(visit) for visit in visits]

    def _count_visits(self, short_url_id: int, date_range: Optional[DateRange]) -> int:
        query = select(func.count(Visit.id)).where(
            *self._visits_conditions(short_url_id, date_range)
        )
        return int(self.db.scalar(query) or 0)

    # ==================== Tag listings ====================

    # TODO: filter by tag once short URL tags are mapped (short_urls_in_tags)
    def find_visits_by_tag(
        self,
        tag: str,
        date_range: Optional[DateRange] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[VisitSchema]:
        logger.debug(f"Visits by tag are not supported yet, tag={tag}")
        return []

    def count_visits_by_tag(self, tag: str, date_range: Optional[DateRange] = None) -> int:
        logger.debug(f"Visits by tag are not supported yet, tag={tag}")
        return 0
