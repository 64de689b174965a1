import math
from functools import cmp_to_key

from app.schemas.listing import Listing

SCORE_TIE_WINDOW = 0.5
RATING_TIE_WINDOW = 0.1

SCHWIMMSCHULE = "Schwimmschule"
MAIN_CATEGORY_BONUS = 20
CATEGORY_BONUS = 15
CITY_BONUS = 10
ADDRESS_BONUS = 5


def quality_score(listing: Listing) -> float:
    return listing.rating_value * math.log(listing.review_count + 1)


def relevance_bonus(listing: Listing, search_location: str | None = None) -> int:
    bonus = 0
    if search_location:
        needle = search_location.lower()
        if listing.city and needle in listing.city.lower():
            bonus += CITY_BONUS
        if listing.address and needle in listing.address.lower():
            bonus += ADDRESS_BONUS
    if listing.main_category == SCHWIMMSCHULE:
        bonus += MAIN_CATEGORY_BONUS
    if listing.categories and SCHWIMMSCHULE in listing.categories:
        bonus += CATEGORY_BONUS
    return bonus


def _compare(a: Listing, b: Listing, a_score: float, b_score: float) -> int:
    if abs(b_score - a_score) > SCORE_TIE_WINDOW:
        return -1 if a_score > b_score else 1
    if abs(b.rating_value - a.rating_value) > RATING_TIE_WINDOW:
        return -1 if a.rating_value > b.rating_value else 1
    return b.review_count - a.review_count


def compare_quality(a: Listing, b: Listing) -> int:
    """Negative when ``a`` ranks before ``b``."""
    return _compare(a, b, quality_score(a), quality_score(b))


def sort_by_quality(listings: list[Listing]) -> list[Listing]:
    return sorted(listings, key=cmp_to_key(compare_quality))


def sort_by_relevance(
    listings: list[Listing], search_location: str | None = None
) -> list[Listing]:
    """Quality ordering with category and location bonuses added to the score."""
    scores = {
        id(listing): quality_score(listing) + relevance_bonus(listing, search_location)
        for listing in listings
    }

    def _cmp(a: Listing, b: Listing) -> int:
        return _compare(a, b, scores[id(a)], scores[id(b)])

    return sorted(listings, key=cmp_to_key(_cmp))
