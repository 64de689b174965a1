from pydantic import BaseModel, Field, field_validator

AVAILABLE_FEATURES = (
    "Babyschwimmen",
    "Kinderschwimmen",
    "Erwachsenenschwimmen",
    "Aqua Fitness",
    "Schwimmkurse für Anfänger",
    "Fortgeschrittenen Kurse",
    "Privatstunden",
    "Gruppenunterricht",
    "Wettkampftraining",
    "Therapieschwimmen",
)


class WeeklyOpeningHours(BaseModel):
    monday: str = ""
    tuesday: str = ""
    wednesday: str = ""
    thursday: str = ""
    friday: str = ""
    saturday: str = ""
    sunday: str = ""


class RegistrationRequest(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    phone: str = ""
    website: str = ""
    description: str = ""
    contact_person_name: str = ""
    contact_person_role: str = ""
    features: list[str] = []
    opening_hours: WeeklyOpeningHours = WeeklyOpeningHours()

    @field_validator("features")
    @classmethod
    def known_features(cls, value: list[str]) -> list[str]:
        unknown = [f for f in value if f not in AVAILABLE_FEATURES]
        if unknown:
            raise ValueError(f"Unknown features: {', '.join(unknown)}")
        # Keep first occurrence order, drop repeats
        return list(dict.fromkeys(value))


class RegistrationRecord(RegistrationRequest):
    image_url: str | None = None
    status: str = "pending"
