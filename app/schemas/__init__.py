from app.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from app.schemas.property import (
    AvailabilityResponse,
    PaginatedProperties,
    PropertyCreate,
    PropertyDetailResponse,
    PropertyResponse,
)
from app.schemas.booking import BookingCreate, BookingResponse
