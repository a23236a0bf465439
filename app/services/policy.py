"""Authorization policy: who may do what to which resource.

This is the only place role and ownership rules live. Routers and services call
authorize() instead of comparing roles themselves.

Rules, first match wins:
  1. Admin may perform any action.
  2. Booking creation requires the guest role.
  3. Property creation and listing management require property_owner or admin.
     Managing a specific listing additionally requires owning it.
  4. Approval/denial requires property_owner owning the booked property.
  5. Cancellation and viewing a booking require being the requester, or
     property_owner owning the property.
  6. Everything else is denied.
"""
from __future__ import annotations

import enum

from app.services.errors import AuthorizationDenied
from app.services.identity import AuthUser


class Action(str, enum.Enum):
    create_booking = "create_booking"
    approve_booking = "approve_booking"
    deny_booking = "deny_booking"
    cancel_booking = "cancel_booking"
    view_booking = "view_booking"
    complete_booking = "complete_booking"
    create_property = "create_property"
    manage_property = "manage_property"
    provision_owner = "provision_owner"
    manage_users = "manage_users"


def _owns(actor: AuthUser, resource_owner_id: int | None) -> bool:
    return actor.is_property_owner and resource_owner_id is not None and actor.id == resource_owner_id


def can_perform(
    actor: AuthUser,
    action: Action,
    resource_owner_id: int | None = None,
    *,
    requester_id: int | None = None,
) -> bool:
    """resource_owner_id is the owner of the property involved (if any);
    requester_id is the guest who made the booking (viewing and cancellation only)."""
    if actor.is_admin:
        return True
    if action == Action.create_booking:
        return actor.is_guest
    if action == Action.create_property:
        return actor.is_property_owner
    if action == Action.manage_property:
        # Listing your own properties passes the caller's id as the owner
        return _owns(actor, resource_owner_id)
    if action in (Action.approve_booking, Action.deny_booking):
        return _owns(actor, resource_owner_id)
    if action in (Action.cancel_booking, Action.view_booking):
        if requester_id is not None and actor.id == requester_id:
            return True
        return _owns(actor, resource_owner_id)
    return False


_DENIAL_MESSAGES = {
    Action.create_booking: "Only guests can create bookings",
    Action.approve_booking: "You can only approve bookings for your own properties",
    Action.deny_booking: "You can only deny bookings for your own properties",
    Action.cancel_booking: "You can only cancel your own bookings or bookings for your own properties",
    Action.view_booking: "You can only view your own bookings or bookings for your own properties",
    Action.create_property: "Only property owners can create properties",
    Action.manage_property: "You can only manage your own properties",
    Action.provision_owner: "Only admins can create property owners",
    Action.manage_users: "Only admins can manage user accounts",
}


def authorize(
    actor: AuthUser,
    action: Action,
    resource_owner_id: int | None = None,
    *,
    requester_id: int | None = None,
) -> None:
    if not can_perform(actor, action, resource_owner_id, requester_id=requester_id):
        raise AuthorizationDenied(
            _DENIAL_MESSAGES.get(action, "Not allowed"),
            actor_id=actor.id,
            action=action.value,
        )
