from app.mappers.semi_structured import (
    Parsed,
    Raw,
    parse_about,
    parse_coordinates,
    parse_detailed_address,
    parse_hours,
    parse_review_list,
    resolve,
)


def test_resolve_variants():
    assert resolve(None) is None
    assert resolve("  ") is None
    assert resolve('{"a": 1}') == Parsed({"a": 1})
    assert resolve("kein json") == Raw("kein json")
    assert resolve([1, 2]) == Parsed([1, 2])


def test_hours_list_form_in_weekday_order():
    hours = parse_hours(
        '[{"day": "Mittwoch", "times": ["9-12", "14-18"]}, {"day": "Montag", "times": "8-16"}]'
    )

    assert hours is not None
    assert [d.day for d in hours.days] == [
        "montag", "dienstag", "mittwoch", "donnerstag", "freitag", "samstag", "sonntag",
    ]
    assert hours.days[0].times == ["8-16"]
    assert hours.days[1].times == []
    assert hours.days[2].times == ["9-12", "14-18"]


def test_hours_map_form_with_english_keys():
    hours = parse_hours({"monday": "9:00-17:00", "sunday": {"times": ["10-12"]}, "holiday": "x"})

    assert hours is not None
    assert hours.days[0].times == ["9:00-17:00"]
    assert hours.days[6].times == ["10-12"]


def test_hours_malformed_is_none():
    assert parse_hours("{nicht json") is None
    assert parse_hours(42) is None
    assert parse_hours([{"foo": "bar"}]) is None
    assert parse_hours(None) is None


def test_about_with_feature_list():
    about = parse_about('{"description": "Kurse für alle", "features": ["Babyschwimmen", "Kinderschwimmen"]}')

    assert about is not None
    assert about.description == "Kurse für alle"
    assert about.features == ["Babyschwimmen", "Kinderschwimmen"]


def test_about_with_nested_sections():
    about = parse_about({"Angebote": {"Babyschwimmen": True, "Aqua Fitness": False}})

    assert about is not None
    assert about.features == ["Babyschwimmen"]


def test_about_scraped_option_sections():
    about = parse_about([
        {"id": "service", "options": [{"name": "Kurse", "enabled": True}, {"name": "Sauna", "enabled": False}]},
    ])

    assert about is not None
    assert about.features == ["Kurse"]


def test_about_raw_text_becomes_description():
    about = parse_about("Seit 1990 in Berlin")

    assert about is not None
    assert about.description == "Seit 1990 in Berlin"
    assert about.features == []


def test_about_unusable_is_none():
    assert parse_about(None) is None
    assert parse_about(3.5) is None


def test_detailed_address_parsed_and_raw():
    parsed = parse_detailed_address('{"street": "Torstr. 1", "city": "Berlin", "postal_code": 10119}')
    raw = parse_detailed_address("Torstr. 1, Berlin")

    assert parsed is not None
    assert parsed.city == "Berlin"
    assert parsed.postal_code == "10119"
    assert parsed.search_text() == "torstr. 1 berlin 10119"
    assert raw is not None
    assert raw.raw == "Torstr. 1, Berlin"
    assert raw.search_text() == "torstr. 1, berlin"


def test_review_list():
    assert parse_review_list('[{"name": "A", "rating": 5}, "x"]') == [{"name": "A", "rating": 5}]
    assert parse_review_list('{"name": "A"}') == []
    assert parse_review_list("[kaputt") == []


def test_coordinates():
    coords = parse_coordinates('{"latitude": 52.52, "longitude": 13.40}')
    short = parse_coordinates({"lat": "48.1", "lng": "11.6"})

    assert coords is not None and coords.latitude == 52.52
    assert short is not None and short.longitude == 11.6
    assert parse_coordinates({"lat": None}) is None
    assert parse_coordinates("nope") is None
