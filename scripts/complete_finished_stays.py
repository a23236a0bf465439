"""
Run the booking completion job once (approved bookings past check-out -> completed).
The app runs this daily via APScheduler; use this to catch up manually.
Run: python scripts/complete_finished_stays.py (from project root)
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import get_settings
from app.database import SessionLocal
from app.services.booking_timer import complete_finished_stays


def main():
    db = SessionLocal()
    try:
        n = complete_finished_stays(db, get_settings())
    finally:
        db.close()
    print(f"  completed: {n} booking(s)")
    print("Done.")


if __name__ == "__main__":
    main()
