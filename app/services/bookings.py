"""Booking orchestration: the only code path that creates bookings or changes their status."""
from __future__ import annotations

import logging
from datetime import date

from app.models.booking import Booking, BookingStatus
from app.models.property import Property
from app.services import availability
from app.services.errors import Conflict, InvalidRequest, NotFound
from app.services.identity import AuthUser
from app.services.policy import Action, authorize
from app.services.pricing import price
from app.services.state_machine import validate_transition
from app.services.store import Store

log = logging.getLogger(__name__)

# A lost compare-and-swap is retried once against a fresh read, then surfaced
CAS_ATTEMPTS = 2


class BookingOrchestrator:
    def __init__(self, store: Store):
        self.store = store

    def _active_property(self, property_id: int) -> Property:
        prop = self.store.find_property(property_id)
        if prop is None or not prop.is_active:
            raise NotFound("Property not found", property_id=property_id)
        return prop

    def is_available(self, property_id: int, check_in: date, check_out: date) -> bool:
        """Read-only pre-flight check; does not reserve anything."""
        self._active_property(property_id)
        if check_in >= check_out:
            raise InvalidRequest("Check-out date must be after check-in date")
        return availability.is_available(self.store, property_id, check_in, check_out)

    def request_booking(
        self,
        actor: AuthUser,
        property_id: int,
        check_in: date,
        check_out: date,
        guest_count: int,
        special_requests: str | None = None,
    ) -> Booking:
        prop = self._active_property(property_id)
        authorize(actor, Action.create_booking, prop.owner_id)

        if check_in >= check_out:
            raise InvalidRequest("Check-out date must be after check-in date", check_in=check_in, check_out=check_out)
        if guest_count < 1:
            raise InvalidRequest("At least one guest is required")
        if guest_count > prop.max_guests:
            raise InvalidRequest(
                f"This property accommodates at most {prop.max_guests} guests",
                guest_count=guest_count,
                max_guests=prop.max_guests,
            )
        transition = validate_transition(None, BookingStatus.pending)

        with self.store.property_guard(prop.id):
            active = self.store.list_active_bookings_for_property(prop.id)
            conflicts = availability.conflicting_bookings(active, check_in, check_out)
            if conflicts:
                raise Conflict(
                    "Property is not available for the selected dates",
                    property_id=prop.id,
                    conflicting_booking_ids=[b.id for b in conflicts],
                )
            booking = Booking(
                property_id=prop.id,
                user_id=actor.id,
                check_in_date=check_in,
                check_out_date=check_out,
                guest_count=guest_count,
                total_price=price(prop, check_in, check_out),
                status=transition.target,
                special_requests=special_requests,
            )
            self.store.insert_booking(booking)

        log.info(
            "Booking %s requested by user %s for property %s, %s to %s",
            booking.id, actor.id, prop.id, check_in, check_out,
        )
        return booking

    def transition_booking(self, actor: AuthUser, booking_id: int, target: BookingStatus) -> Booking:
        for attempt in range(1, CAS_ATTEMPTS + 1):
            booking = self.store.find_booking(booking_id)
            if booking is None:
                raise NotFound("Booking not found", booking_id=booking_id)
            prop = self.store.find_property(booking.property_id)
            if prop is None:
                raise NotFound("Property not found", property_id=booking.property_id)

            current = booking.status
            transition = validate_transition(current, target)
            authorize(actor, transition.action, prop.owner_id, requester_id=booking.user_id)

            try:
                updated = self.store.update_booking_status(booking_id, current, target)
            except Conflict:
                if attempt == CAS_ATTEMPTS:
                    raise
                log.warning("Booking %s changed while moving to %s; retrying with a fresh read", booking_id, target.value)
                continue
            log.info("Booking %s moved %s -> %s by user %s", booking_id, current.value, target.value, actor.id)
            return updated
        raise AssertionError("unreachable")

    def complete_booking(self, booking_id: int, today: date | None = None) -> Booking:
        """Clock-driven approved -> completed, once the stay's check-out date has passed."""
        booking = self.store.find_booking(booking_id)
        if booking is None:
            raise NotFound("Booking not found", booking_id=booking_id)
        validate_transition(booking.status, BookingStatus.completed, system=True)
        today = today or date.today()
        if booking.check_out_date > today:
            raise InvalidRequest(f"Booking {booking_id} has not reached its check-out date yet")
        updated = self.store.update_booking_status(booking_id, booking.status, BookingStatus.completed)
        log.info("Booking %s completed after check-out on %s", booking_id, booking.check_out_date)
        return updated
