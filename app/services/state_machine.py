"""Booking lifecycle: the one table of legal status changes."""
from __future__ import annotations

from dataclasses import dataclass

from app.models.booking import BookingStatus, TERMINAL_STATUSES
from app.services.errors import InvalidTransition
from app.services.policy import Action


@dataclass(frozen=True)
class Transition:
    source: BookingStatus | None
    target: BookingStatus
    action: Action
    # Driven by the clock (scheduler), never by a user request
    system_only: bool = False


TRANSITIONS: dict[tuple[BookingStatus | None, BookingStatus], Transition] = {
    (t.source, t.target): t
    for t in (
        Transition(None, BookingStatus.pending, Action.create_booking),
        Transition(BookingStatus.pending, BookingStatus.approved, Action.approve_booking),
        Transition(BookingStatus.pending, BookingStatus.denied, Action.deny_booking),
        Transition(BookingStatus.pending, BookingStatus.cancelled, Action.cancel_booking),
        Transition(BookingStatus.approved, BookingStatus.cancelled, Action.cancel_booking),
        Transition(BookingStatus.approved, BookingStatus.completed, Action.complete_booking, system_only=True),
    )
}


def allowed_targets(current: BookingStatus | None, *, system: bool = False) -> list[BookingStatus]:
    return [
        t.target
        for (source, _), t in TRANSITIONS.items()
        if source == current and (system or not t.system_only)
    ]


def validate_transition(
    current: BookingStatus | None,
    target: BookingStatus,
    *,
    system: bool = False,
) -> Transition:
    """Return the table entry for current -> target or raise InvalidTransition.

    Re-applying the current status is rejected like any other missing entry, so a
    repeated approve/deny/cancel never silently succeeds.
    """
    if current in TERMINAL_STATUSES:
        raise InvalidTransition(current, target, f"Booking is already {current.value}; no further changes allowed")
    transition = TRANSITIONS.get((current, target))
    if transition is None:
        allowed = ", ".join(s.value for s in allowed_targets(current, system=system)) or "none"
        source = current.value if current else "new"
        raise InvalidTransition(current, target, f"Cannot move booking from {source} to {target.value} (allowed: {allowed})")
    if transition.system_only and not system:
        raise InvalidTransition(current, target, f"Bookings become {target.value} automatically after check-out")
    return transition
