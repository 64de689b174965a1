from fastapi import APIRouter, HTTPException

from app.dependencies import ImportedListingDep
from app.mappers.landing import COURSE_TYPES, parse_city_name, parse_target_group, split_slug
from app.schemas.listing import FilterRequest
from app.schemas.responses import LandingResponse, SearchResponse
from app.services.imported_listings import ImportedListingService

router = APIRouter()


async def _landing(
    course_type: str, slug: str | None, service: ImportedListingService
) -> LandingResponse:
    content = COURSE_TYPES.get(course_type)
    if content is None:
        raise HTTPException(status_code=404, detail="Not found")

    stadt, zielgruppe = split_slug(slug)
    first_page = await service.fetch_page(0)
    city = parse_city_name(stadt, first_page.items)

    if city:
        results = await service.apply_filters(FilterRequest(location=city))
    else:
        results = SearchResponse(
            items=first_page.items, count=len(first_page.items), notice=first_page.notice
        )

    return LandingResponse(
        course_type=course_type,
        heading=f"{content.heading} in {city}" if city else content.heading,
        description=content.description,
        city=city or None,
        target_group=parse_target_group(zielgruppe),
        results=results,
    )


@router.get("/{course_type}", response_model=LandingResponse)
async def landing(course_type: str, service: ImportedListingDep) -> LandingResponse:
    return await _landing(course_type, None, service)


@router.get("/{course_type}/{slug}", response_model=LandingResponse)
async def landing_city(course_type: str, slug: str, service: ImportedListingDep) -> LandingResponse:
    return await _landing(course_type, slug, service)
