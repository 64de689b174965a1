import logging

from pydantic import ValidationError

from app.exceptions.custom import ListingNotFoundError, RateLimitError, SupabaseError
from app.mappers.filters import (
    apply_thresholds,
    is_postal_code_search,
    matches_postal_code,
    matches_text,
    merge_unique,
    sanitize_filter_value,
)
from app.mappers.listing_mapper import from_schwimmschule_row
from app.mappers.ranking import sort_by_quality
from app.schemas.listing import Coordinates, FilterRequest, Listing
from app.schemas.responses import ListingPage, SearchResponse
from app.schemas.supabase import SchwimmschuleRow
from app.services.geocoding import GeocodingService
from app.services.supabase import LISTING_TABLE, SupabaseService

logger = logging.getLogger(__name__)

RADIUS_RPC = "search_schwimmschule_by_location"
DEFAULT_RADIUS_KM = 25
PAGE_SIZE = 10

LOAD_ERROR = "Fehler beim Laden der Schwimmschulen"
LOAD_MORE_ERROR = "Fehler beim Laden weiterer Schwimmschulen"
FILTER_ERROR = "Fehler beim Anwenden der Filter"

BackendError = (SupabaseError, RateLimitError)


def format_rows(rows: list[dict]) -> list[Listing]:
    listings: list[Listing] = []
    for row in rows:
        try:
            listings.append(from_schwimmschule_row(SchwimmschuleRow(**row)))
        except ValidationError as exc:
            logger.warning("Skipping malformed listing row: %s", exc)
    return listings


class ListingService:
    """Curated listings from the ``schwimmschule`` table."""

    def __init__(
        self,
        supabase: SupabaseService,
        geocoding: GeocodingService,
        page_size: int = PAGE_SIZE,
        default_radius_km: int = DEFAULT_RADIUS_KM,
    ):
        self._supabase = supabase
        self._geocoding = geocoding
        self.page_size = page_size
        self._default_radius_km = default_radius_km

    async def fetch_page(self, page: int = 0) -> ListingPage:
        start = page * self.page_size
        end = start + self.page_size - 1

        try:
            result = await self._supabase.select_range(LISTING_TABLE, start, end)
        except BackendError as exc:
            logger.error("Error loading schools (page %d): %s", page, exc)
            return ListingPage(
                items=[], page=page, page_size=self.page_size, total=0, has_more=False,
                notice=LOAD_ERROR if page == 0 else LOAD_MORE_ERROR,
            )

        items = sort_by_quality(format_rows(result.rows))
        return ListingPage(
            items=items,
            page=page,
            page_size=self.page_size,
            total=result.total,
            has_more=bool(result.rows) and result.total > end + 1,
        )

    async def get_listing(self, place_id: str) -> Listing:
        row = await self._supabase.select_one(LISTING_TABLE, "place_id", place_id)
        if row is None:
            raise ListingNotFoundError(place_id)
        return from_schwimmschule_row(SchwimmschuleRow(**row))

    async def baseline(self, pages_loaded: int = 1) -> list[Listing]:
        """The records a client has loaded so far; empty if the backend fails."""
        try:
            result = await self._supabase.select_range(
                LISTING_TABLE, 0, pages_loaded * self.page_size - 1
            )
        except BackendError as exc:
            logger.error("Error loading baseline listings: %s", exc)
            return []
        return format_rows(result.rows)

    async def _radius_search(self, coordinates: Coordinates, radius_km: int) -> list[Listing]:
        rows = await self._supabase.rpc(
            RADIUS_RPC,
            {
                "search_lat": coordinates.latitude,
                "search_lon": coordinates.longitude,
                "radius_km": radius_km,
            },
        )
        return format_rows(rows)

    async def _postal_code_search(
        self, code: str, coordinates: Coordinates, radius_km: int
    ) -> list[Listing]:
        try:
            radius_results = await self._radius_search(coordinates, radius_km)
        except BackendError as exc:
            logger.error("Error in postal code radius search: %s", exc)
            radius_results = []

        try:
            all_rows = await self._supabase.select(LISTING_TABLE)
        except BackendError as exc:
            logger.error("Error fetching all schools: %s", exc)
            return radius_results

        postal_matches = [l for l in format_rows(all_rows) if matches_postal_code(l, code)]
        combined = merge_unique(radius_results, postal_matches)
        logger.info("Combined postal code search results: %d", len(combined))
        return combined

    async def _location_text_search(self, location: str) -> list[Listing]:
        term = sanitize_filter_value(location)
        rows = await self._supabase.select(
            LISTING_TABLE,
            filters={"or": f"(address.ilike.*{term}*,detailed_address->>city.ilike.*{term}*)"},
        )
        return format_rows(rows)

    async def apply_filters(self, request: FilterRequest) -> SearchResponse:
        logger.info("Applying filters: %s", request.model_dump(exclude={"pages_loaded"}))
        search = request.search.strip()
        location = request.location.strip()
        radius_km = request.radius or self._default_radius_km
        coordinates: Coordinates | None = None
        notice: str | None = None

        if search and is_postal_code_search(search):
            coordinates = await self._geocoding.coordinates_for(search)
            if coordinates:
                candidates = await self._postal_code_search(search, coordinates, radius_km)
            else:
                candidates = await self.baseline(request.pages_loaded)
        elif location:
            coordinates = await self._geocoding.coordinates_for(location)
            try:
                if coordinates:
                    candidates = await self._radius_search(coordinates, radius_km)
                else:
                    candidates = await self._location_text_search(location)
            except BackendError as exc:
                logger.error("Error in location search: %s", exc)
                candidates = await self.baseline(request.pages_loaded)
                notice = FILTER_ERROR
        else:
            candidates = await self.baseline(request.pages_loaded)

        filtered = candidates
        if search and not is_postal_code_search(search):
            filtered = [l for l in filtered if matches_text(l, search)]
        filtered = sort_by_quality(apply_thresholds(filtered, request))

        logger.info("Final filtered results: %d", len(filtered))
        return SearchResponse(
            items=filtered,
            count=len(filtered),
            coordinates=coordinates,
            radius_km=radius_km if coordinates else None,
            notice=notice,
        )
