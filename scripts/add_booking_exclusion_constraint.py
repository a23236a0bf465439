"""
Add a PostgreSQL exclusion constraint so two active bookings on one property can never overlap,
even if a writer bypasses the application's per-property lock.
For a NEW database this is still optional; create_all() does not create it.
Run once on PostgreSQL: python scripts/add_booking_exclusion_constraint.py (from project root)
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy import text
from app.database import engine
from app.services.store import OVERLAP_CONSTRAINT


def main():
    if engine.dialect.name != "postgresql":
        print(f"  skip: exclusion constraints need PostgreSQL (got {engine.dialect.name})")
        return
    with engine.begin() as conn:
        exists = conn.execute(
            text("SELECT 1 FROM pg_constraint WHERE conname = :name"), {"name": OVERLAP_CONSTRAINT}
        ).first()
        if exists:
            print(f"  skip (exists): {OVERLAP_CONSTRAINT}")
        else:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS btree_gist"))
            # '[)' = half-open: check-out day may be the next guest's check-in day
            conn.execute(text(
                f"ALTER TABLE bookings ADD CONSTRAINT {OVERLAP_CONSTRAINT} EXCLUDE USING gist ("
                "property_id WITH =, "
                "daterange(check_in_date, check_out_date, '[)') WITH &&"
                ") WHERE (status IN ('pending', 'approved'))"
            ))
            print(f"  added: {OVERLAP_CONSTRAINT}")
    print("Done.")


if __name__ == "__main__":
    main()
