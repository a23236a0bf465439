"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User, UserRole
from app.models.property import Property, PropertyType
from app.models.booking import Booking, BookingStatus, ACTIVE_STATUSES, TERMINAL_STATUSES

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyType",
    "Booking",
    "BookingStatus",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
]
