"""Typed failures of the booking core.

Every failure names the invariant it protects so the HTTP layer can map it to a
status code without inspecting messages. app.main renders them as
{"error": <code>, "message": <text>}.
"""
from __future__ import annotations

from typing import Any


class BookingError(Exception):
    code = "internal_error"
    status_code = 500

    def __init__(self, message: str = "", **context: Any):
        super().__init__(message or self.code)
        self.context = context


class NotFound(BookingError):
    code = "not_found"
    status_code = 404


class InvalidRequest(BookingError):
    code = "invalid_request"
    status_code = 400


class InvalidRange(InvalidRequest):
    """Date range with no whole nights in it."""
    code = "invalid_range"


class Conflict(BookingError):
    """Date overlap on creation, or a lost compare-and-swap on a transition."""
    code = "conflict"
    status_code = 409


class InvalidTransition(BookingError):
    code = "invalid_transition"
    status_code = 409

    def __init__(self, current, target, message: str = ""):
        current_v = getattr(current, "value", current)
        target_v = getattr(target, "value", target)
        super().__init__(
            message or f"Cannot move booking from {current_v} to {target_v}",
            current=current_v,
            target=target_v,
        )
        self.current = current
        self.target = target


class AuthorizationDenied(BookingError):
    code = "authorization_denied"
    status_code = 403


class AuthenticationFailed(BookingError):
    code = "authentication_failed"
    status_code = 401


class Internal(BookingError):
    """Persisted data the core cannot interpret (e.g. an unknown status value)."""
    code = "internal_error"
    status_code = 500
