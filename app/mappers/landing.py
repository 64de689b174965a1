from dataclasses import dataclass

from app.schemas.listing import Listing

PLACE_ID_PREFIX = "ChIJ"


@dataclass(frozen=True)
class CourseType:
    heading: str
    description: str


COURSE_TYPES: dict[str, CourseType] = {
    "schwimmkurs": CourseType("Schwimmkurse", "Entdecken Sie professionelle Schwimmkurse"),
    "schwimmschule": CourseType("Schwimmschulen", "Finden Sie die besten Schwimmschulen"),
    "babyschwimmen": CourseType("Babyschwimmen", "Spielerisches Babyschwimmen ab 3 Monaten"),
    "kinderkurse": CourseType("Kinderschwimmkurse", "Schwimmkurse für Kinder von 3-11 Jahren"),
    "anfaengerkurs": CourseType("Anfängerkurse", "Schwimmen lernen für Anfänger jeden Alters"),
}

TARGET_GROUPS = {
    "kleinkinder": "Kleinkinder",
    "kinder": "Kinder",
    "erwachsene": "Erwachsene",
    "babys": "Babys",
    "anfaenger": "Anfänger",
    "fortgeschrittene": "Fortgeschrittene",
}


def split_slug(slug: str | None) -> tuple[str, str | None]:
    """``"berlin-kinder"`` -> ``("berlin", "kinder")``."""
    if not slug:
        return "", None
    if slug.startswith(PLACE_ID_PREFIX):
        return slug, None
    stadt, _, zielgruppe = slug.partition("-")
    return stadt, zielgruppe or None


def _title_words(text: str) -> str:
    return "".join(
        ch.upper() if i == 0 or not text[i - 1].isalnum() else ch
        for i, ch in enumerate(text)
    )


def parse_city_name(stadt: str | None, listings: list[Listing] | None = None) -> str:
    if not stadt:
        return ""
    if stadt.startswith(PLACE_ID_PREFIX):
        match = next((l for l in listings or [] if l.id == stadt), None)
        return match.city or "" if match else ""
    return _title_words(stadt.split("-")[0])


def parse_target_group(zielgruppe: str | None) -> str | None:
    if not zielgruppe:
        return None
    return TARGET_GROUPS.get(zielgruppe.lower(), zielgruppe)
