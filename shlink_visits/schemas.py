"""
Pydantic schemas decoding visit rows into plain values
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, model_serializer


class DateRange(BaseModel):
    """Inclusive date bounds; an unset bound means unbounded on that side"""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def since(cls, start_date: datetime) -> "DateRange":
        return cls(start_date=start_date)

    @classmethod
    def until(cls, end_date: datetime) -> "DateRange":
        return cls(end_date=end_date)

    @classmethod
    def between(cls, start_date: datetime, end_date: datetime) -> "DateRange":
        return cls(start_date=start_date, end_date=end_date)

    @property
    def is_empty(self) -> bool:
        return self.start_date is None and self.end_date is None


class VisitLocationSchema(BaseModel):
    """Schema for visit location"""

    id: int
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    region_name: Optional[str] = None
    city_name: Optional[str] = None
    timezone: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    is_empty: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @model_serializer
    def custom_serializer(self) -> Dict[str, Any]:
        if self.is_empty:
            return {
                "id": self.id,
                "is_empty": True,
            }

        return {
            "id": self.id,
            "country_code": self.country_code,
            "country_name": self.country_name,
            "region_name": self.region_name,
            "city_name": self.city_name,
            "timezone": self.timezone,
            "lat": self.lat,
            "lon": self.lon,
            "is_empty": False,
        }


class VisitSchema(BaseModel):
    """Schema for visit with its location, if one was ever resolved"""

    id: int
    referer: Optional[str] = None
    date: datetime
    remote_addr: Optional[str] = None
    user_agent: Optional[str] = None
    visited_url: Optional[str] = None
    type: str
    potential_bot: bool = False
    short_url_id: Optional[int] = None
    visit_location_id: Optional[int] = None
    location: Optional[VisitLocationSchema] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class VisitsPage(BaseModel):
    """One page of a visits listing together with the unpaged total"""

    total: int
    limit: Optional[int]
    offset: int
    data: List[VisitSchema]
