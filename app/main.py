import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import (
    ListingNotFoundError,
    RateLimitError,
    StorageError,
    SupabaseError,
)
from app.exceptions.handlers import (
    listing_not_found_handler,
    rate_limit_error_handler,
    storage_error_handler,
    supabase_error_handler,
)
from app.routers.health import router as health_router
from app.routers.landing import router as landing_router
from app.routers.listings import router as listings_router
from app.routers.registration import router as registration_router
from app.services.geocoding import GeocodingService
from app.services.imported_listings import ImportedListingService
from app.services.listings import ListingService
from app.services.registration import RegistrationService
from app.services.storage import StorageService
from app.services.supabase import SupabaseService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=30.0) as client:
        supabase = SupabaseService(client, settings.supabase_url, settings.supabase_key)
        storage = StorageService(
            client, settings.supabase_url, settings.supabase_key, settings.storage_bucket
        )
        geocoding = GeocodingService(supabase)

        app.state.listing_service = ListingService(
            supabase,
            geocoding,
            page_size=settings.curated_page_size,
            default_radius_km=settings.default_radius_km,
        )
        app.state.imported_listing_service = ImportedListingService(
            supabase, page_size=settings.imported_page_size
        )
        app.state.registration_service = RegistrationService(supabase, storage)

        yield


app = FastAPI(title="SwimFind", lifespan=lifespan)

app.add_exception_handler(SupabaseError, supabase_error_handler)
app.add_exception_handler(StorageError, storage_error_handler)
app.add_exception_handler(ListingNotFoundError, listing_not_found_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(health_router)
app.include_router(listings_router)
app.include_router(registration_router)
# Catch-all course type paths, keep last
app.include_router(landing_router)
