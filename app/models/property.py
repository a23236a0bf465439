"""Property listings."""
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class PropertyType(str, enum.Enum):
    hotel = "hotel"
    hostel = "hostel"
    apartment = "apartment"


class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price_per_night > 0", name="ck_properties_price_positive"),
        CheckConstraint("max_guests > 0", name="ck_properties_max_guests_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Set once at creation; listings never change hands
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    property_type = Column(SQLEnum(PropertyType, name="property_type"), nullable=False, index=True)
    location = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    city = Column(String(100), nullable=False, index=True)
    country = Column(String(100), nullable=False, index=True)
    postal_code = Column(String(20), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    price_per_night = Column(Integer, nullable=False, index=True)  # minor currency units (cents)
    max_guests = Column(Integer, nullable=False, index=True)
    bedrooms = Column(Integer, nullable=False, default=1)
    bathrooms = Column(Integer, nullable=False, default=1)

    amenities = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)

    # Soft delete: inactive listings are hidden from search and refuse new bookings
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", backref="properties")
