"""Customer entity and category enums."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class DeviceBrand(str, Enum):
    SAMSUNG = "Samsung"
    APPLE = "Apple"
    HUAWEI = "Huawei"
    XIAOMI = "Xiaomi"
    OPPO = "Oppo"
    VIVO = "Vivo"
    OTHER = "Other"


class DigitalInterest(str, Enum):
    SOCIAL_MEDIA = "Social Media"
    GAMING = "Gaming"
    SHOPPING = "Shopping"
    NEWS = "News"
    ENTERTAINMENT = "Entertainment"
    EDUCATION = "Education"
    HEALTH = "Health"
    FINANCE = "Finance"
    TRAVEL = "Travel"
    FOOD = "Food"
    OTHER = "Other"


class LocationType(str, Enum):
    URBAN = "urban"
    SUBURBAN = "sub urban"
    RURAL = "rural"


class Customer(BaseModel):
    """A customer activity record ready for insertion."""

    number: int = Field(..., gt=0)
    location_name: str
    date: datetime
    login_hour: str | None = None
    user_name: str
    birth_year: int
    gender: Gender = Gender.OTHER
    email: str
    phone_number: str | None = None
    device_brand: DeviceBrand = DeviceBrand.OTHER
    digital_interest: DigitalInterest = DigitalInterest.OTHER
    location_type: LocationType = LocationType.URBAN

    def login_datetime(self) -> datetime | None:
        """Combine ``date`` and ``login_hour`` into a single timestamp."""
        if not self.login_hour:
            return None
        hours, _, minutes = self.login_hour.partition(":")
        return self.date.replace(
            hour=int(hours or 0), minute=int(minutes or 0), second=0, microsecond=0
        )

    def to_document(self, now: datetime) -> dict[str, Any]:
        """Build the document written to the sink, including derived fields."""
        doc = self.model_dump(mode="json")
        doc["actual_age"] = now.year - self.birth_year
        login_at = self.login_datetime()
        doc["login_datetime"] = login_at.isoformat() if login_at else None
        doc["created_at"] = now.isoformat()
        doc["updated_at"] = now.isoformat()
        return doc
