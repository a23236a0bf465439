from datetime import date
from types import SimpleNamespace

import pytest

from app.services.errors import InvalidRange, InvalidRequest
from app.services.pricing import nights, price


def test_three_nights_at_100():
    prop = SimpleNamespace(price_per_night=10000)
    assert price(prop, date(2024, 6, 1), date(2024, 6, 4)) == 30000


def test_nights_cross_month_and_leap_day():
    assert nights(date(2024, 2, 28), date(2024, 3, 1)) == 2


def test_single_night():
    prop = SimpleNamespace(price_per_night=4999)
    assert price(prop, date(2024, 12, 31), date(2025, 1, 1)) == 4999


@pytest.mark.parametrize("check_out", [date(2024, 6, 1), date(2024, 5, 30)])
def test_zero_or_negative_nights_rejected(check_out):
    prop = SimpleNamespace(price_per_night=10000)
    with pytest.raises(InvalidRange) as exc:
        price(prop, date(2024, 6, 1), check_out)
    assert isinstance(exc.value, InvalidRequest)
