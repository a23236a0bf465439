from datetime import date

from app.models.booking import BookingStatus
from app.services.booking_timer import complete_finished_stays, get_finished_stays

TODAY = date(2024, 7, 1)


def test_completes_only_finished_approved_stays(db, settings, listing, guest, make_booking):
    done = make_booking(listing, guest, date(2024, 6, 1), date(2024, 6, 5), status=BookingStatus.approved)
    checkout_today = make_booking(listing, guest, date(2024, 6, 28), TODAY, status=BookingStatus.approved)
    ongoing = make_booking(listing, guest, date(2024, 7, 1), date(2024, 7, 4), status=BookingStatus.approved)
    never_approved = make_booking(listing, guest, date(2024, 6, 10), date(2024, 6, 12))
    cancelled = make_booking(listing, guest, date(2024, 6, 12), date(2024, 6, 14), status=BookingStatus.cancelled)

    assert get_finished_stays(db, TODAY) == [done.id, checkout_today.id]
    assert complete_finished_stays(db, settings, today=TODAY) == 2

    db.expire_all()
    assert done.status == BookingStatus.completed
    assert checkout_today.status == BookingStatus.completed
    assert ongoing.status == BookingStatus.approved
    assert never_approved.status == BookingStatus.pending
    assert cancelled.status == BookingStatus.cancelled


def test_second_run_is_a_no_op(db, settings, listing, guest, make_booking):
    make_booking(listing, guest, date(2024, 6, 1), date(2024, 6, 5), status=BookingStatus.approved)
    assert complete_finished_stays(db, settings, today=TODAY) == 1
    assert complete_finished_stays(db, settings, today=TODAY) == 0
