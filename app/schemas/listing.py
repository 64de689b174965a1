from __future__ import annotations

import math
import re
from typing import Literal

from pydantic import BaseModel, Field, computed_field

RadiusKm = Literal[5, 10, 25, 50]

MAX_RATING = 5.0

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)")


def parse_rating(value: str | float | None) -> float:
    """Parse a rating such as ``"4,5"``; anything unusable is 0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        rating = float(value)
    else:
        match = _LEADING_FLOAT.match(value.replace(",", "."))
        if not match:
            return 0.0
        rating = float(match.group(0))
    if math.isnan(rating):
        return 0.0
    return min(max(rating, 0.0), MAX_RATING)


def parse_reviews(value: str | int | None) -> int:
    """Parse a review count the way ``parseInt`` does; anything unusable is 0."""
    if value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    match = _LEADING_INT.match(value)
    if not match:
        return 0
    return max(int(match.group(0)), 0)


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class DayHours(BaseModel):
    day: str
    times: list[str] = []


class OpeningHours(BaseModel):
    days: list[DayHours] = []


class About(BaseModel):
    description: str = ""
    features: list[str] = []


class DetailedAddress(BaseModel):
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    raw: str | None = None

    def search_text(self) -> str:
        if self.raw is not None:
            return self.raw.lower()
        return f"{self.street or ''} {self.city or ''} {self.postal_code or ''}".lower()


class Listing(BaseModel):
    id: str
    name: str = "Unnamed"
    website: str | None = None
    rating: str | None = None
    reviews: str | None = None
    phone: str | None = None
    hours: OpeningHours | None = None
    detailed_address: DetailedAddress | None = None
    address: str | None = None
    google_maps_url: str | None = None
    about: About | None = None
    featured_reviews: list[dict] = []
    detailed_reviews: list[dict] = []
    featured_image: str | None = None
    distance_km: float | None = None
    coordinates: Coordinates | None = None
    main_category: str | None = None
    categories: str | None = None
    city: str | None = None
    zip: str | None = None
    street: str | None = None
    workday_timing: str | None = None
    is_temporarily_closed: bool = False
    owner_name: str | None = None

    @computed_field
    @property
    def rating_value(self) -> float:
        return parse_rating(self.rating)

    @computed_field
    @property
    def review_count(self) -> int:
        return parse_reviews(self.reviews)


class FilterCriteria(BaseModel):
    search: str = ""
    location: str = ""
    radius: RadiusKm | None = None
    min_rating: float = Field(default=0, ge=0, le=5)
    min_reviews: int = Field(default=0, ge=0)


class FilterRequest(FilterCriteria):
    pages_loaded: int = Field(default=1, ge=1, le=50)
