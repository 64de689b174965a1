import re

from app.schemas.listing import FilterCriteria, Listing

_POSTAL_CODE = re.compile(r"^\d{4,5}$")
_DIGITS = re.compile(r"^\d+$")
# Characters that delimit PostgREST filter expressions
_FILTER_SYNTAX = re.compile(r"[,()*%]")


def is_postal_code_search(term: str) -> bool:
    return bool(_POSTAL_CODE.match(term.strip()))


def is_numeric_location(term: str) -> bool:
    return bool(_DIGITS.match(term.strip()))


def sanitize_filter_value(term: str) -> str:
    return _FILTER_SYNTAX.sub(" ", term).strip()


def matches_text(listing: Listing, term: str) -> bool:
    needle = term.lower()
    candidates = [listing.name, listing.address]
    if listing.detailed_address is not None:
        candidates.extend([listing.detailed_address.street, listing.detailed_address.city])
    return any(c and needle in c.lower() for c in candidates)


def matches_postal_code(listing: Listing, code: str) -> bool:
    needle = code.strip().lower()
    if listing.address and needle in listing.address.lower():
        return True
    if listing.detailed_address is not None:
        return needle in listing.detailed_address.search_text()
    return False


def apply_thresholds(listings: list[Listing], criteria: FilterCriteria) -> list[Listing]:
    filtered = listings
    if criteria.min_rating > 0:
        filtered = [l for l in filtered if l.rating_value >= criteria.min_rating]
    if criteria.min_reviews > 0:
        filtered = [l for l in filtered if l.review_count >= criteria.min_reviews]
    return filtered


def merge_unique(primary: list[Listing], extra: list[Listing]) -> list[Listing]:
    """Primary results first, then extras whose id is not yet present."""
    merged = list(primary)
    seen = {l.id for l in merged}
    for listing in extra:
        if listing.id not in seen:
            seen.add(listing.id)
            merged.append(listing)
    return merged
