from app.mappers.semi_structured import (
    parse_about,
    parse_coordinates,
    parse_detailed_address,
    parse_hours,
    parse_review_list,
)
from app.schemas.listing import About, Listing
from app.schemas.supabase import ImportedRow, SchwimmschuleRow


def _categories_text(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(c) for c in value)
    return str(value)


def from_schwimmschule_row(row: SchwimmschuleRow) -> Listing:
    detailed_address = parse_detailed_address(row.detailed_address)
    return Listing(
        id=row.place_id,
        name=row.name or "Unnamed",
        website=row.website,
        rating=row.rating,
        reviews=row.reviews,
        phone=row.phone,
        hours=parse_hours(row.hours),
        detailed_address=detailed_address,
        address=row.address,
        google_maps_url=row.link,
        about=parse_about(row.about),
        featured_reviews=parse_review_list(row.featured_reviews),
        detailed_reviews=parse_review_list(row.detailed_reviews),
        featured_image=row.featured_image,
        distance_km=row.distance_km,
        coordinates=parse_coordinates(row.coordinates),
        main_category=row.main_category,
        categories=_categories_text(row.categories),
        city=detailed_address.city if detailed_address else None,
        zip=detailed_address.postal_code if detailed_address else None,
        street=detailed_address.street if detailed_address else None,
    )


def _imported_address(row: ImportedRow) -> str:
    # "Street, 10115 Berlin"; partial rows keep the separators they have
    return f"{row.street or ''}, {row.zip or ''} {row.city or ''}".strip()


def from_imported_row(row: ImportedRow) -> Listing:
    rating = str(row.rating) if row.rating is not None else "0"
    reviews = str(row.reviews) if row.reviews is not None else "0"
    return Listing(
        id=row.place_id or f"imported-{row.id}",
        name=row.name or "Unnamed",
        website=row.website,
        rating=rating,
        reviews=reviews,
        phone=row.phone,
        address=_imported_address(row),
        google_maps_url=row.link,
        about=About(description=row.description or ""),
        featured_image=row.featured_image,
        main_category=row.main_category,
        categories=row.categories,
        city=row.city,
        zip=row.zip,
        street=row.street,
        workday_timing=row.workday_timing,
        is_temporarily_closed=row.is_temporarily_closed == "TRUE",
        owner_name=row.owner_name,
    )
