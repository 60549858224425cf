"""
Query predicates shared by visit listings and bulk sweeps
"""

import enum
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import contains_eager

from shlink_visits.models import Visit, VisitLocation
from shlink_visits.schemas import DateRange

# Largest signed 64-bit integer, used as the "no limit" value
NO_LIMIT = 2**63 - 1


class VisitQueryValidationError(ValueError):
    """Raised when paging or block arguments are out of range"""

    pass


class VisitFilter(enum.Enum):
    ALL = "all"
    UNLOCATED = "unlocated"
    EMPTY_LOCATION = "empty_location"


def date_range_conditions(
    column: Any, date_range: Optional[DateRange]
) -> List[ColumnElement[bool]]:
    """
    Build inclusive bound predicates for whichever dates are set

    Args:
        column: Timestamp column to constrain
        date_range: Optional range, either side may be unset

    Returns:
        List of predicates, empty when the range is unbounded
    """
    if date_range is None or date_range.is_empty:
        return []

    conditions: List[ColumnElement[bool]] = []
    if date_range.start_date is not None:
        conditions.append(column >= date_range.start_date)
    if date_range.end_date is not None:
        conditions.append(column <= date_range.end_date)

    return conditions


def id_greater_than(column: Any, last_id: int) -> ColumnElement[bool]:
    return column > last_id


def validate_block_size(block_size: int) -> None:
    if block_size < 1:
        raise VisitQueryValidationError(
            f"Block size must be a positive integer, got {block_size}"
        )


def validate_paging(limit: Optional[int], offset: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise VisitQueryValidationError(f"Limit cannot be negative, got {limit}")
    if offset is not None and offset < 0:
        raise VisitQueryValidationError(f"Offset cannot be negative, got {offset}")


@dataclass(frozen=True)
class VisitBlockQuery:
    """
    Immutable description of one bulk sweep over the visits table.

    Every block gets its own statement from statement_after(), so nothing
    carries over between round-trips except the cursor value.
    """

    visit_filter: VisitFilter
    block_size: int

    def __post_init__(self) -> None:
        validate_block_size(self.block_size)

    def filter_conditions(self) -> List[ColumnElement[bool]]:
        if self.visit_filter is VisitFilter.UNLOCATED:
            return [Visit.visit_location_id.is_(None)]
        if self.visit_filter is VisitFilter.EMPTY_LOCATION:
            return [
                Visit.visit_location_id.is_not(None),
                VisitLocation.is_empty.is_(True),
            ]

        return []

    def statement_after(self, last_id: int) -> Select[Any]:
        """Select the next block of visits with an id above last_id"""
        return (
            select(Visit)
            .outerjoin(Visit.location)
            .options(contains_eager(Visit.location))
            .where(*self.filter_conditions())
            .where(id_greater_than(Visit.id, last_id))
            .order_by(Visit.id.asc())
            .limit(self.block_size)
        )
