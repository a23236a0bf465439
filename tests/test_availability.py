from datetime import date

import pytest

from app.models.booking import BookingStatus
from app.services.availability import conflicting_bookings, is_available, ranges_overlap


@pytest.mark.parametrize(
    "a, b, expected",
    [
        # new range starts inside an existing one
        ((date(2024, 6, 3), date(2024, 6, 8)), (date(2024, 6, 1), date(2024, 6, 5)), True),
        # new range ends inside an existing one
        ((date(2024, 5, 28), date(2024, 6, 2)), (date(2024, 6, 1), date(2024, 6, 5)), True),
        # new range swallows an existing one
        ((date(2024, 5, 30), date(2024, 6, 10)), (date(2024, 6, 1), date(2024, 6, 5)), True),
        # new range sits inside an existing one
        ((date(2024, 6, 2), date(2024, 6, 3)), (date(2024, 6, 1), date(2024, 6, 5)), True),
        # checkout day == next check-in day
        ((date(2024, 6, 5), date(2024, 6, 8)), (date(2024, 6, 1), date(2024, 6, 5)), False),
        ((date(2024, 5, 25), date(2024, 6, 1)), (date(2024, 6, 1), date(2024, 6, 5)), False),
        ((date(2024, 7, 1), date(2024, 7, 3)), (date(2024, 6, 1), date(2024, 6, 5)), False),
    ],
)
def test_ranges_overlap_half_open(a, b, expected):
    assert ranges_overlap(*a, *b) is expected
    assert ranges_overlap(*b, *a) is expected


def test_inactive_bookings_do_not_block(listing, guest, make_booking, store):
    for status in (BookingStatus.denied, BookingStatus.cancelled, BookingStatus.completed):
        make_booking(listing, guest, date(2024, 6, 1), date(2024, 6, 5), status=status)

    assert is_available(store, listing.id, date(2024, 6, 2), date(2024, 6, 4))


def test_pending_and_approved_block(listing, guest, make_booking, store):
    pending = make_booking(listing, guest, date(2024, 6, 1), date(2024, 6, 5))
    approved = make_booking(listing, guest, date(2024, 6, 10), date(2024, 6, 12), status=BookingStatus.approved)

    assert not is_available(store, listing.id, date(2024, 6, 4), date(2024, 6, 6))
    assert not is_available(store, listing.id, date(2024, 6, 11), date(2024, 6, 20))
    assert is_available(store, listing.id, date(2024, 6, 5), date(2024, 6, 10))

    active = store.list_active_bookings_for_property(listing.id)
    conflicts = conflicting_bookings(active, date(2024, 6, 1), date(2024, 6, 30))
    assert {b.id for b in conflicts} == {pending.id, approved.id}


def test_other_properties_do_not_block(make_property, owner, listing, guest, make_booking, store):
    other = make_property(owner, title="Other place")
    make_booking(other, guest, date(2024, 6, 1), date(2024, 6, 5), status=BookingStatus.approved)

    assert is_available(store, listing.id, date(2024, 6, 1), date(2024, 6, 5))
