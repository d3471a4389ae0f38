"""Domain models."""
from customer_import_core.models.customer import (
    Customer,
    DeviceBrand,
    DigitalInterest,
    Gender,
    LocationType,
)

__all__ = ["Customer", "DeviceBrand", "DigitalInterest", "Gender", "LocationType"]
