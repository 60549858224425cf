from .base import Base
from .domain import Domain
from .short_url import ShortUrl
from .visit import Visit
from .visit_location import VisitLocation

__all__ = ["Base", "Domain", "ShortUrl", "Visit", "VisitLocation"]
