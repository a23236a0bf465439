"""Persistence boundary for the booking core.

The core only talks to the Store protocol. SqlAlchemyStore is the production
implementation; it owns transaction boundaries so the orchestrator never calls
commit/rollback itself.
"""
from __future__ import annotations

import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import ContextManager, Iterator, Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models.booking import ACTIVE_STATUSES, Booking, BookingStatus
from app.models.property import Property
from app.services.errors import Conflict, Internal

log = logging.getLogger(__name__)


class Store(Protocol):
    def find_property(self, property_id: int) -> Property | None: ...

    def find_booking(self, booking_id: int) -> Booking | None: ...

    def list_active_bookings_for_property(self, property_id: int) -> list[Booking]: ...

    def list_bookings_for_user(self, user_id: int, status: BookingStatus | None = None) -> list[Booking]: ...

    def list_bookings_for_property(self, property_id: int, status: BookingStatus | None = None) -> list[Booking]: ...

    def insert_booking(self, booking: Booking) -> Booking: ...

    def update_booking_status(self, booking_id: int, expected: BookingStatus, new: BookingStatus) -> Booking: ...

    def property_guard(self, property_id: int) -> ContextManager[None]: ...


# Installed by scripts/add_booking_exclusion_constraint.py (PostgreSQL only)
OVERLAP_CONSTRAINT = "ex_bookings_active_no_overlap"

# One lock per property id, shared by every session in this process.
# An entry lives only while some request holds a reference to its lock.
_registry_lock = threading.Lock()
_property_locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()


def _lock_for(property_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _property_locks.get(property_id)
        if lock is None:
            lock = _property_locks[property_id] = threading.Lock()
        return lock


@contextmanager
def _reading(what: str) -> Iterator[None]:
    """Rows with enum values this code does not know about are data corruption, not a crash."""
    try:
        yield
    except LookupError as e:
        log.error("Unrecognized stored value while loading %s: %s", what, e)
        raise Internal(f"Stored {what} has an unrecognized value") from e


def is_overlap_violation(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    if getattr(diag, "constraint_name", None) == OVERLAP_CONSTRAINT:
        return True
    return OVERLAP_CONSTRAINT in str(exc.orig)


class SqlAlchemyStore:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.lock_timeout = settings.booking_lock_timeout_seconds

    def find_property(self, property_id: int) -> Property | None:
        with _reading("property"):
            return self.db.execute(
                select(Property)
                .where(Property.id == property_id)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()

    def find_booking(self, booking_id: int) -> Booking | None:
        with _reading("booking"):
            return self.db.execute(
                select(Booking)
                .where(Booking.id == booking_id)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()

    def list_active_bookings_for_property(self, property_id: int) -> list[Booking]:
        with _reading("booking"):
            rows = self.db.execute(
                select(Booking)
                .where(Booking.property_id == property_id, Booking.status.in_(list(ACTIVE_STATUSES)))
                .order_by(Booking.check_in_date)
                .execution_options(populate_existing=True)
            ).scalars().all()
        return list(rows)

    def list_bookings_for_user(self, user_id: int, status: BookingStatus | None = None) -> list[Booking]:
        """Bookings the user requested, newest first."""
        return self._list_bookings(Booking.user_id == user_id, status)

    def list_bookings_for_property(self, property_id: int, status: BookingStatus | None = None) -> list[Booking]:
        return self._list_bookings(Booking.property_id == property_id, status)

    def _list_bookings(self, condition, status: BookingStatus | None) -> list[Booking]:
        stmt = select(Booking).where(condition)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        with _reading("booking"):
            rows = self.db.execute(
                stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
                .execution_options(populate_existing=True)
            ).scalars().all()
        return list(rows)

    def insert_booking(self, booking: Booking) -> Booking:
        self.db.add(booking)
        try:
            self.db.flush()  # assigns booking.id; commit happens when the property guard exits
        except IntegrityError as e:
            if is_overlap_violation(e):
                # The exclusion constraint caught an overlap written by another process
                raise Conflict("Property is not available for the selected dates") from e
            log.error("Booking insert for property %s violated a constraint: %s", booking.property_id, e.orig)
            raise Internal("Booking could not be stored") from e
        return booking

    def update_booking_status(self, booking_id: int, expected: BookingStatus, new: BookingStatus) -> Booking:
        """Compare-and-swap: only applies if the row still has the expected status."""
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == expected)
            .values(status=new, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise Conflict(
                f"Booking {booking_id} is no longer {expected.value}",
                booking_id=booking_id,
                expected=expected.value,
            )
        self.db.commit()
        booking = self.find_booking(booking_id)
        if booking is None:
            raise Internal(f"Booking {booking_id} vanished after update")
        return booking

    @contextmanager
    def property_guard(self, property_id: int) -> Iterator[None]:
        """Serialize check-then-insert for one property and commit on success.

        The in-process lock covers every backend; on PostgreSQL the row lock from
        SELECT ... FOR UPDATE also serializes across processes. The commit happens
        before the lock is released so the next holder sees this insert.
        """
        lock = _lock_for(property_id)
        if not lock.acquire(timeout=self.lock_timeout):
            raise Conflict("Another booking request for this property is in progress; try again", property_id=property_id)
        try:
            self.db.execute(select(Property.id).where(Property.id == property_id).with_for_update())
            yield
            self.db.commit()
        except BaseException:
            self.db.rollback()
            raise
        finally:
            lock.release()
