"""Booking schemas."""
from datetime import date, datetime
from pydantic import BaseModel, Field
from app.models.booking import BookingStatus


class BookingCreate(BaseModel):
    property_id: int
    check_in: date
    check_out: date
    guest_count: int = Field(ge=1)
    special_requests: str | None = Field(None, max_length=2000)


class BookingResponse(BaseModel):
    id: int
    property_id: int
    user_id: int
    check_in_date: date
    check_out_date: date
    guest_count: int
    total_price: int
    status: BookingStatus
    special_requests: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
