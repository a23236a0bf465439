"""The authenticated caller as the booking core sees it."""
from __future__ import annotations

from dataclasses import dataclass

from app.models.user import User, UserRole


@dataclass(frozen=True)
class AuthUser:
    id: int
    role: UserRole
    email: str = ""

    @property
    def is_guest(self) -> bool:
        return self.role == UserRole.guest

    @property
    def is_property_owner(self) -> bool:
        return self.role == UserRole.property_owner

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @classmethod
    def from_user(cls, user: User) -> "AuthUser":
        return cls(id=user.id, role=user.role, email=user.email)
