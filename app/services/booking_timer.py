"""Daily job: approved stays whose check-out date has passed become completed."""
import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import Settings
from app.models.booking import Booking, BookingStatus
from app.services.bookings import BookingOrchestrator
from app.services.errors import BookingError
from app.services.store import SqlAlchemyStore

log = logging.getLogger(__name__)


def get_finished_stays(db: Session, today: date) -> list[int]:
    """Ids of approved bookings whose check-out date is today or earlier."""
    return list(
        db.execute(
            select(Booking.id).where(
                Booking.status == BookingStatus.approved,
                Booking.check_out_date <= today,
            ).order_by(Booking.id)
        ).scalars()
    )


def complete_finished_stays(db: Session, settings: Settings, today: date | None = None) -> int:
    """Complete every finished stay. Returns how many were moved."""
    today = today or date.today()
    orchestrator = BookingOrchestrator(SqlAlchemyStore(db, settings))
    completed = 0
    for booking_id in get_finished_stays(db, today):
        try:
            orchestrator.complete_booking(booking_id, today=today)
        except BookingError as e:
            # Cancelled or completed by someone else since the scan
            log.info("Skipping completion of booking %s: %s", booking_id, e)
            continue
        completed += 1
    return completed


def run_booking_completion_job(settings: Settings) -> None:
    from app.database import SessionLocal

    db = SessionLocal()
    try:
        n = complete_finished_stays(db, settings)
        log.info("Booking completion job: %d booking(s) completed.", n)
    finally:
        db.close()
