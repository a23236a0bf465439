"""Property listings: public search, owner listing management, availability pre-flight."""
import logging
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, get_orchestrator, get_store
from app.models.booking import BookingStatus
from app.models.property import Property, PropertyType
from app.schemas.booking import BookingResponse
from app.schemas.property import (
    AvailabilityResponse,
    PaginatedProperties,
    PropertyCreate,
    PropertyDetailResponse,
    PropertyResponse,
)
from app.services.availability import overlapping_booking_exists
from app.services.bookings import BookingOrchestrator
from app.services.errors import InvalidRequest, NotFound
from app.services.identity import AuthUser
from app.services.policy import Action, authorize
from app.services.pricing import nights, price
from app.services.store import SqlAlchemyStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def _get_property_or_404(db: Session, property_id: int, active_only: bool = True) -> Property:
    q = db.query(Property).filter(Property.id == property_id)
    if active_only:
        q = q.filter(Property.is_active.is_(True))
    prop = q.first()
    if not prop:
        raise NotFound("Property not found")
    return prop


@router.get("", response_model=PaginatedProperties)
def search_properties(
    location: str | None = Query(None, description="Substring match on the location label"),
    city: str | None = None,
    property_type: PropertyType | None = None,
    min_price: int | None = Query(None, ge=0, description="Nightly rate floor, cents"),
    max_price: int | None = Query(None, ge=0, description="Nightly rate ceiling, cents"),
    guests: int | None = Query(None, ge=1, description="Party size the property must fit"),
    check_in: date | None = None,
    check_out: date | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    q = db.query(Property).filter(Property.is_active.is_(True))
    if location:
        q = q.filter(Property.location.ilike(f"%{location.strip()}%"))
    if city:
        q = q.filter(func.lower(Property.city) == city.strip().lower())
    if property_type:
        q = q.filter(Property.property_type == property_type)
    if min_price is not None:
        q = q.filter(Property.price_per_night >= min_price)
    if max_price is not None:
        q = q.filter(Property.price_per_night <= max_price)
    if guests is not None:
        q = q.filter(Property.max_guests >= guests)
    if (check_in is None) != (check_out is None):
        raise InvalidRequest("check_in and check_out must be given together")
    if check_in and check_out:
        if check_in >= check_out:
            raise InvalidRequest("check_out must be after check_in")
        q = q.filter(~overlapping_booking_exists(Property.id, check_in, check_out))

    total = q.count()
    props = (
        q.order_by(Property.created_at.desc(), Property.id.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return PaginatedProperties(
        data=[PropertyDetailResponse.model_validate(p) for p in props],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=(total + per_page - 1) // per_page,
    )


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    data: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    authorize(current_user, Action.create_property)
    prop = Property(owner_id=current_user.id, is_active=True, **data.model_dump())
    db.add(prop)
    db.commit()
    db.refresh(prop)
    log.info("User %s listed property %s (%s)", current_user.id, prop.id, prop.title)
    return PropertyResponse.model_validate(prop)


@router.get("/my", response_model=list[PropertyResponse])
def list_my_properties(
    inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    """Default: active listings only. inactive=true: soft-deleted ones only."""
    authorize(current_user, Action.manage_property, current_user.id)
    props = (
        db.query(Property)
        .filter(Property.owner_id == current_user.id, Property.is_active.is_(not inactive))
        .order_by(Property.created_at.desc(), Property.id.desc())
        .all()
    )
    return [PropertyResponse.model_validate(p) for p in props]


@router.get("/{property_id}", response_model=PropertyDetailResponse)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return PropertyDetailResponse.model_validate(_get_property_or_404(db, property_id))


@router.delete("/{property_id}", response_model=PropertyResponse)
def deactivate_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    """Soft delete. Existing bookings are left as they are; no new ones can be requested."""
    prop = _get_property_or_404(db, property_id, active_only=False)
    authorize(current_user, Action.manage_property, prop.owner_id)
    if prop.is_active:
        prop.is_active = False
        db.commit()
        db.refresh(prop)
        log.info("User %s deactivated property %s", current_user.id, prop.id)
    return PropertyResponse.model_validate(prop)


@router.get("/{property_id}/bookings", response_model=list[BookingResponse])
def list_property_bookings(
    property_id: int,
    status_filter: BookingStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
    store: SqlAlchemyStore = Depends(get_store),
):
    prop = _get_property_or_404(db, property_id, active_only=False)
    authorize(current_user, Action.manage_property, prop.owner_id)
    return [BookingResponse.model_validate(b) for b in store.list_bookings_for_property(prop.id, status_filter)]


@router.get("/{property_id}/availability", response_model=AvailabilityResponse)
def check_availability(
    property_id: int,
    check_in: date,
    check_out: date,
    db: Session = Depends(get_db),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
):
    available = orchestrator.is_available(property_id, check_in, check_out)
    prop = _get_property_or_404(db, property_id)
    return AvailabilityResponse(
        property_id=prop.id,
        check_in=check_in,
        check_out=check_out,
        available=available,
        nights=nights(check_in, check_out),
        total_price=price(prop, check_in, check_out) if available else None,
    )
