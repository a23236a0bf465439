"""Booking requests and their approval lifecycle."""
from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_user, get_orchestrator, get_store
from app.models.booking import BookingStatus
from app.schemas.booking import BookingCreate, BookingResponse
from app.services.bookings import BookingOrchestrator
from app.services.errors import NotFound
from app.services.identity import AuthUser
from app.services.policy import Action, authorize
from app.services.store import SqlAlchemyStore

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    current_user: AuthUser = Depends(get_current_user),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
):
    booking = orchestrator.request_booking(
        current_user,
        data.property_id,
        data.check_in,
        data.check_out,
        data.guest_count,
        data.special_requests,
    )
    return BookingResponse.model_validate(booking)


@router.get("", response_model=list[BookingResponse])
def list_my_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status"),
    current_user: AuthUser = Depends(get_current_user),
    store: SqlAlchemyStore = Depends(get_store),
):
    """Bookings I requested, newest first."""
    return [BookingResponse.model_validate(b) for b in store.list_bookings_for_user(current_user.id, status_filter)]


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    current_user: AuthUser = Depends(get_current_user),
    store: SqlAlchemyStore = Depends(get_store),
):
    booking = store.find_booking(booking_id)
    if not booking:
        raise NotFound("Booking not found")
    prop = store.find_property(booking.property_id)
    authorize(current_user, Action.view_booking, prop.owner_id if prop else None, requester_id=booking.user_id)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/approve", response_model=BookingResponse)
def approve_booking(
    booking_id: int,
    current_user: AuthUser = Depends(get_current_user),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
):
    booking = orchestrator.transition_booking(current_user, booking_id, BookingStatus.approved)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/deny", response_model=BookingResponse)
def deny_booking(
    booking_id: int,
    current_user: AuthUser = Depends(get_current_user),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
):
    booking = orchestrator.transition_booking(current_user, booking_id, BookingStatus.denied)
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    current_user: AuthUser = Depends(get_current_user),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
):
    booking = orchestrator.transition_booking(current_user, booking_id, BookingStatus.cancelled)
    return BookingResponse.model_validate(booking)
