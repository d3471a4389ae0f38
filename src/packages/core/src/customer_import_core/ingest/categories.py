"""Lenient coercion of free-text category values.

Every function here is total: unrecognized input maps to a catch-all value
instead of raising, so a row is never rejected for its category alone.
"""
from customer_import_core.models import DeviceBrand, DigitalInterest, Gender, LocationType

_GENDERS = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
}

_LOCATION_TYPES = {
    "urban": LocationType.URBAN,
    "sub urban": LocationType.SUBURBAN,
    "suburban": LocationType.SUBURBAN,
    "rural": LocationType.RURAL,
}


def _key(value: str | None) -> str:
    return " ".join((value or "").lower().split())


def _by_value(enum_cls, value: str | None, default):
    key = _key(value)
    for member in enum_cls:
        if member.value.lower() == key:
            return member
    return default


def coerce_gender(value: str | None) -> Gender:
    return _GENDERS.get(_key(value), Gender.OTHER)


def coerce_device_brand(value: str | None) -> DeviceBrand:
    return _by_value(DeviceBrand, value, DeviceBrand.OTHER)


def coerce_digital_interest(value: str | None) -> DigitalInterest:
    return _by_value(DigitalInterest, value, DigitalInterest.OTHER)


def coerce_location_type(value: str | None) -> LocationType:
    # LocationType has no catch-all member; unknown values count as urban.
    return _LOCATION_TYPES.get(_key(value), LocationType.URBAN)
