"""
Create all tables from app.models and seed the bootstrap admin.
Same as what the app does on startup; useful before the first deploy.
Run: python scripts/create_tables.py (from project root)
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import get_settings
from app.database import Base, SessionLocal, engine
from app.models import User, Property, Booking  # noqa: F401
from app.seed import seed_admin


def main():
    Base.metadata.create_all(bind=engine)
    print("  tables: " + ", ".join(sorted(Base.metadata.tables)))
    db = SessionLocal()
    try:
        admin = seed_admin(db, get_settings())
        print(f"  admin: {admin.email if admin else '(not seeded; set ADMIN_PASSWORD)'}")
    finally:
        db.close()
    print("Done.")


if __name__ == "__main__":
    main()
