"""Property schemas."""
from datetime import date
from pydantic import BaseModel, Field
from app.models.property import PropertyType
from app.schemas.auth import UserResponse


class PropertyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    property_type: PropertyType
    location: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1, max_length=100)
    country: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    latitude: float | None = None
    longitude: float | None = None
    price_per_night: int = Field(ge=1)  # cents
    max_guests: int = Field(ge=1)
    bedrooms: int = Field(ge=1)
    bathrooms: int = Field(ge=1)
    amenities: list[str] = []
    images: list[str] = []


class PropertyResponse(BaseModel):
    id: int
    owner_id: int
    title: str
    description: str
    property_type: PropertyType
    location: str
    address: str
    city: str
    country: str
    postal_code: str
    latitude: float | None = None
    longitude: float | None = None
    price_per_night: int
    max_guests: int
    bedrooms: int
    bathrooms: int
    amenities: list[str] = []
    images: list[str] = []
    is_active: bool = True

    class Config:
        from_attributes = True


class PropertyDetailResponse(PropertyResponse):
    owner: UserResponse


class PaginatedProperties(BaseModel):
    data: list[PropertyDetailResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class AvailabilityResponse(BaseModel):
    property_id: int
    check_in: date
    check_out: date
    available: bool
    nights: int
    total_price: int | None = None  # quoted only when available
