from typing import Any

from pydantic import BaseModel

# Columns typed as Json in the backend may come back as text or decoded JSON.
JsonValue = Any


class SchwimmschuleRow(BaseModel):
    place_id: str
    name: str | None = None
    website: str | None = None
    rating: str | None = None
    reviews: str | None = None
    phone: str | None = None
    hours: JsonValue = None
    detailed_address: JsonValue = None
    address: str | None = None
    link: str | None = None
    about: JsonValue = None
    featured_reviews: JsonValue = None
    detailed_reviews: JsonValue = None
    featured_image: str | None = None
    coordinates: JsonValue = None
    main_category: str | None = None
    categories: JsonValue = None
    distance_km: float | None = None


class ImportedRow(BaseModel):
    id: str | int
    name: str
    place_id: str | None = None
    website: str | None = None
    rating: str | float | None = None
    reviews: str | int | None = None
    phone: str | None = None
    street: str | None = None
    zip: str | None = None
    city: str | None = None
    address: str | None = None
    link: str | None = None
    description: str | None = None
    featured_image: str | None = None
    main_category: str | None = None
    categories: str | None = None
    workday_timing: str | None = None
    is_temporarily_closed: str | None = None
    owner_name: str | None = None


class CoordinatesRow(BaseModel):
    latitude: float | None = None
    longitude: float | None = None
