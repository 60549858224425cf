from .short_url_resolver import ShortUrlResolver
from .visit_filters import VisitBlockQuery, VisitFilter, VisitQueryValidationError
from .visit_iterator import iterate_visits
from .visit_repository import NOT_FOUND_ID, VisitRepository

__all__ = [
    "ShortUrlResolver",
    "VisitBlockQuery",
    "VisitFilter",
    "VisitQueryValidationError",
    "iterate_visits",
    "NOT_FOUND_ID",
    "VisitRepository",
]
