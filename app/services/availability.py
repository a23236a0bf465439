"""Availability: does a date range collide with an active booking?

Ranges are half-open [check_in, check_out): a guest checking out on the day the
next one checks in is not a collision.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable

from sqlalchemy import and_, exists, select
from sqlalchemy.sql.elements import ColumnElement

from app.models.booking import ACTIVE_STATUSES, Booking


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start < b_end and b_start < a_end


def conflicting_bookings(bookings: Iterable[Booking], check_in: date, check_out: date) -> list[Booking]:
    return [
        b for b in bookings
        if b.status in ACTIVE_STATUSES and ranges_overlap(check_in, check_out, b.check_in_date, b.check_out_date)
    ]


def is_available(store, property_id: int, check_in: date, check_out: date) -> bool:
    """True when no pending/approved booking on the property overlaps the range."""
    active = store.list_active_bookings_for_property(property_id)
    return not conflicting_bookings(active, check_in, check_out)


def overlapping_booking_exists(property_id_column, check_in: date, check_out: date) -> ColumnElement:
    """SQL form of the same rule, for filtering listings by free dates."""
    return exists(
        select(Booking.id).where(
            and_(
                Booking.property_id == property_id_column,
                Booking.status.in_(list(ACTIVE_STATUSES)),
                Booking.check_in_date < check_out,
                Booking.check_out_date > check_in,
            )
        )
    )
