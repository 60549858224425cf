"""
Keyset-based bulk iteration over the visits table
"""

import logging
from typing import Iterator

from sqlalchemy.orm import Session

from shlink_visits.schemas import VisitSchema
from shlink_visits.services.visit_filters import VisitBlockQuery

logger = logging.getLogger(__name__)


def iterate_visits(db: Session, query: VisitBlockQuery) -> Iterator[VisitSchema]:
    """
    Lazily yield every visit matching the query, ascending by id

    Blocks are requested by "id greater than the last seen id" instead of an
    offset, so rows deleted ahead of the cursor never shift later rows out of
    the scan. Each block is fetched completely before its first row is
    yielded; the caller may write to the store between items.

    Args:
        db: Session used for every round-trip
        query: Filter and block size for this sweep

    Yields:
        Decoded visits, each exactly once
    """
    last_id = 0

    while True:
        visits = db.scalars(query.statement_after(last_id)).all()
        logger.debug(
            f"Fetched {len(visits)} {query.visit_filter.value} visits after id={last_id}"
        )
        if not visits:
            return

        for visit in visits:
            decoded = VisitSchema.model_validate(visit)
            last_id = decoded.id
            yield decoded
