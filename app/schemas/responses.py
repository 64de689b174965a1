from __future__ import annotations

from pydantic import BaseModel

from app.schemas.listing import Coordinates, Listing


class ListingPage(BaseModel):
    items: list[Listing]
    page: int
    page_size: int
    total: int
    has_more: bool
    notice: str | None = None


class SearchResponse(BaseModel):
    items: list[Listing]
    count: int
    coordinates: Coordinates | None = None
    radius_km: int | None = None
    notice: str | None = None


class RegistrationResponse(BaseModel):
    id: str | None = None
    status: str
    image_url: str | None = None
    message: str


class LandingResponse(BaseModel):
    course_type: str
    heading: str
    description: str
    city: str | None = None
    target_group: str | None = None
    results: SearchResponse


class HealthResponse(BaseModel):
    status: str
