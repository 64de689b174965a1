import logging

from pydantic import ValidationError

from app.exceptions.custom import RateLimitError, SupabaseError
from app.mappers.filters import is_numeric_location, sanitize_filter_value
from app.schemas.listing import Coordinates
from app.schemas.supabase import CoordinatesRow
from app.services.supabase import GEOLOCATION_TABLE, SupabaseService

logger = logging.getLogger(__name__)

POSTAL_CODE_RPC = "get_coordinates_by_postal_code"


def _to_coordinates(rows: list[dict]) -> Coordinates | None:
    for row in rows:
        try:
            parsed = CoordinatesRow(**row)
        except ValidationError as exc:
            logger.warning("Skipping unusable coordinates row: %s", exc)
            continue
        if parsed.latitude is not None and parsed.longitude is not None:
            return Coordinates(latitude=parsed.latitude, longitude=parsed.longitude)
    return None


class GeocodingService:
    def __init__(self, supabase: SupabaseService):
        self._supabase = supabase

    async def coordinates_for(self, location: str) -> Coordinates | None:
        """Resolve a postal code or place name; ``None`` when nothing matches.

        Lookup failures are logged and read as unresolved.
        """
        term = location.strip()
        if not term:
            return None

        try:
            if is_numeric_location(term):
                rows = await self._supabase.rpc(POSTAL_CODE_RPC, {"postal_code_input": term})
            else:
                # Place names live in the "country" column of the geolocation table
                name = sanitize_filter_value(term)
                if not name:
                    return None
                rows = await self._supabase.select(
                    GEOLOCATION_TABLE,
                    filters={"country": f"ilike.*{name}*"},
                    limit=1,
                    columns="latitude,longitude",
                )
        except (SupabaseError, RateLimitError) as exc:
            logger.warning("Geocoding failed for %r: %s", term, exc)
            return None

        coordinates = _to_coordinates(rows)
        if coordinates is None:
            logger.info("No coordinates found for location: %s", term)
        return coordinates
