import logging

from pydantic import ValidationError

from app.exceptions.custom import RateLimitError, SupabaseError
from app.mappers.filters import apply_thresholds, sanitize_filter_value
from app.mappers.listing_mapper import from_imported_row
from app.mappers.ranking import sort_by_relevance
from app.schemas.listing import FilterRequest, Listing
from app.schemas.responses import ListingPage, SearchResponse
from app.schemas.supabase import ImportedRow
from app.services.supabase import IMPORTED_TABLE, SupabaseService

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
SEARCH_LIMIT = 100

CATEGORY_FILTER = (
    "(main_category.eq.Schwimmschule,"
    "categories.ilike.*Schwimmschule*,"
    "categories.ilike.*Babyschwimmschule*,"
    "categories.ilike.*Schwimmlehrer*)"
)

LOAD_ERROR = "Fehler beim Laden der Schwimmschulen"
FILTER_ERROR = "Fehler beim Anwenden der Filter"

BackendError = (SupabaseError, RateLimitError)


def format_rows(rows: list[dict]) -> list[Listing]:
    listings: list[Listing] = []
    for row in rows:
        try:
            listings.append(from_imported_row(ImportedRow(**row)))
        except ValidationError as exc:
            logger.warning("Skipping malformed imported row: %s", exc)
    return listings


def build_filter_params(location: str, search: str) -> dict[str, str]:
    """PostgREST ``and`` of the location, search and category OR-groups."""
    groups: list[str] = []
    location = sanitize_filter_value(location.lower())
    if location:
        groups.append(f"or(city.ilike.*{location}*,address.ilike.*{location}*,zip.eq.{location})")
    search = sanitize_filter_value(search.lower())
    if search:
        groups.append(
            f"or(name.ilike.*{search}*,description.ilike.*{search}*,"
            f"city.ilike.*{search}*,address.ilike.*{search}*)"
        )
    groups.append(f"or{CATEGORY_FILTER}")
    return {"and": f"({','.join(groups)})"}


class ImportedListingService:
    """Listings from the bulk-imported ``schwimmschulen_import`` table."""

    def __init__(self, supabase: SupabaseService, page_size: int = PAGE_SIZE):
        self._supabase = supabase
        self.page_size = page_size

    async def fetch_page(self, page: int = 0) -> ListingPage:
        start = page * self.page_size
        end = start + self.page_size - 1

        try:
            result = await self._supabase.select_range(IMPORTED_TABLE, start, end)
        except BackendError as exc:
            logger.error("Error loading imported schools (page %d): %s", page, exc)
            return ListingPage(
                items=[], page=page, page_size=self.page_size, total=0, has_more=False,
                notice=LOAD_ERROR if page == 0 else None,
            )

        return ListingPage(
            items=sort_by_relevance(format_rows(result.rows)),
            page=page,
            page_size=self.page_size,
            total=result.total,
            has_more=bool(result.rows) and result.total > end + 1,
        )

    async def baseline(self, pages_loaded: int = 1) -> list[Listing]:
        try:
            result = await self._supabase.select_range(
                IMPORTED_TABLE, 0, pages_loaded * self.page_size - 1
            )
        except BackendError as exc:
            logger.error("Error loading baseline imported listings: %s", exc)
            return []
        return format_rows(result.rows)

    async def apply_filters(self, request: FilterRequest) -> SearchResponse:
        logger.info("Applying filters to imported data: %s", request.model_dump(exclude={"pages_loaded"}))
        location = request.location.strip()
        search = request.search.strip()

        try:
            rows = await self._supabase.select(
                IMPORTED_TABLE,
                filters=build_filter_params(location, search),
                limit=SEARCH_LIMIT,
            )
        except BackendError as exc:
            logger.error("Error applying filters: %s", exc)
            fallback = await self.baseline(request.pages_loaded)
            return SearchResponse(items=fallback, count=len(fallback), notice=FILTER_ERROR)

        filtered = apply_thresholds(format_rows(rows), request)
        filtered = sort_by_relevance(filtered, location or search)

        logger.info("Filtered imported results: %d", len(filtered))
        return SearchResponse(items=filtered, count=len(filtered))
