from app.mappers.filters import (
    apply_thresholds,
    is_numeric_location,
    is_postal_code_search,
    matches_postal_code,
    matches_text,
    merge_unique,
    sanitize_filter_value,
)
from app.schemas.listing import DetailedAddress, FilterCriteria, Listing


def _listing(id: str, rating: str | None = None, reviews: str | None = None, **extra) -> Listing:
    return Listing(id=id, rating=rating, reviews=reviews, **extra)


def test_postal_code_detection():
    assert is_postal_code_search("10115")
    assert is_postal_code_search(" 8001 ")
    assert not is_postal_code_search("Berlin")
    assert not is_postal_code_search("101")
    assert not is_postal_code_search("101155")
    assert not is_postal_code_search("10115 Berlin")


def test_numeric_location():
    assert is_numeric_location("123")
    assert not is_numeric_location("Köln")


def test_sanitize_filter_value_strips_postgrest_syntax():
    assert sanitize_filter_value("Berlin,(Mitte)") == "Berlin  Mitte"
    assert sanitize_filter_value("50%*") == "50"


def test_matches_text_name_address_and_detailed_address():
    listing = _listing(
        "a",
        name="Delfin Schwimmschule",
        address="Hauptstr. 5",
        detailed_address=DetailedAddress(street="Hauptstr. 5", city="Potsdam"),
    )

    assert matches_text(listing, "delfin")
    assert matches_text(listing, "HAUPTSTR")
    assert matches_text(listing, "potsdam")
    assert not matches_text(listing, "Hamburg")


def test_matches_postal_code_in_raw_detailed_address():
    listing = _listing("a", detailed_address=DetailedAddress(raw="Am See 3, 14467 Potsdam"))

    assert matches_postal_code(listing, "14467")
    assert not matches_postal_code(listing, "10115")


def test_matches_postal_code_in_address():
    assert matches_postal_code(_listing("a", address="Torstr. 1, 10119 Berlin"), "10119")
    assert not matches_postal_code(_listing("b"), "10119")


def test_min_rating_excludes_lower_and_unparseable():
    listings = [
        _listing("good", "4,5"),
        _listing("edge", "4,0"),
        _listing("low", "3,9"),
        _listing("none", None),
        _listing("bad", "super"),
    ]

    result = apply_thresholds(listings, FilterCriteria(min_rating=4.0))

    assert [l.id for l in result] == ["good", "edge"]


def test_min_reviews_threshold():
    listings = [_listing("a", reviews="10"), _listing("b", reviews="3"), _listing("c")]

    result = apply_thresholds(listings, FilterCriteria(min_reviews=5))

    assert [l.id for l in result] == ["a"]


def test_no_thresholds_keeps_everything():
    listings = [_listing("a"), _listing("b")]
    assert apply_thresholds(listings, FilterCriteria()) == listings


def test_merge_unique_primary_first():
    primary = [_listing("a"), _listing("b")]
    extra = [_listing("b", name="duplicate"), _listing("c")]

    merged = merge_unique(primary, extra)

    assert [l.id for l in merged] == ["a", "b", "c"]
    assert merged[1].name == "Unnamed"
