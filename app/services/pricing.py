"""Flat per-night pricing."""
from datetime import date

from app.models.property import Property
from app.services.errors import InvalidRange


def nights(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def price(prop: Property, check_in: date, check_out: date) -> int:
    """Total in minor currency units: whole nights times the nightly rate."""
    n = nights(check_in, check_out)
    if n <= 0:
        raise InvalidRange("Check-out date must be after check-in date", check_in=check_in, check_out=check_out)
    return n * prop.price_per_night
