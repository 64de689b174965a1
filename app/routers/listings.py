from fastapi import APIRouter, Query

from app.dependencies import ImportedListingDep, ListingDep
from app.schemas.listing import FilterRequest, Listing
from app.schemas.responses import ListingPage, SearchResponse

router = APIRouter()


@router.get("/schulen", response_model=ListingPage)
async def list_schulen(service: ListingDep, page: int = Query(0, ge=0)) -> ListingPage:
    return await service.fetch_page(page)


@router.post("/schulen/suche", response_model=SearchResponse)
async def search_schulen(service: ListingDep, request: FilterRequest) -> SearchResponse:
    return await service.apply_filters(request)


@router.get("/schulen/import", response_model=ListingPage)
async def list_imported_schulen(
    service: ImportedListingDep, page: int = Query(0, ge=0)
) -> ListingPage:
    return await service.fetch_page(page)


@router.post("/schulen/import/suche", response_model=SearchResponse)
async def search_imported_schulen(
    service: ImportedListingDep, request: FilterRequest
) -> SearchResponse:
    return await service.apply_filters(request)


@router.get("/anbieter/{place_id}", response_model=Listing)
async def get_anbieter(place_id: str, service: ListingDep) -> Listing:
    return await service.get_listing(place_id)
