"""Bookings and their lifecycle states."""
from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class BookingStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    denied = "denied"
    cancelled = "cancelled"
    completed = "completed"


# Active bookings hold their dates; the rest no longer count against availability
ACTIVE_STATUSES = frozenset({BookingStatus.pending, BookingStatus.approved})
TERMINAL_STATUSES = frozenset({BookingStatus.denied, BookingStatus.cancelled, BookingStatus.completed})


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_bookings_date_order"),
        CheckConstraint("guest_count > 0", name="ck_bookings_guest_count_positive"),
        Index("ix_bookings_dates", "check_in_date", "check_out_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)  # requester

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)  # exclusive
    guest_count = Column(Integer, nullable=False)

    # Derived from the property's nightly rate at request time, never client-supplied
    total_price = Column(Integer, nullable=False)

    status = Column(
        SQLEnum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.pending,
        index=True,
    )
    special_requests = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    property = relationship("Property", backref="bookings")
    user = relationship("User", backref="bookings")
