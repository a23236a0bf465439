"""
Create a test property owner, a test guest and one listing for the owner.
Use on a development database so you can log in and try the booking flow without an admin.

Run from project root:
  python scripts/create_test_users.py

Credentials are printed at the end.
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import SessionLocal
from app.models.property import Property, PropertyType
from app.models.user import User, UserRole
from app.services.auth import get_password_hash

# Default credentials (change if you want)
OWNER_EMAIL = "owner@stayhub.demo"
OWNER_PASSWORD = "Password123!"

GUEST_EMAIL = "guest@stayhub.demo"
GUEST_PASSWORD = "Password123!"


def _get_or_create_user(db, email: str, password: str, role: UserRole, first_name: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        print(f"{role.value} already exists: {email}")
        return user
    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name="Demo",
        role=role,
        is_active=True,
    )
    db.add(user)
    db.flush()
    print(f"Created {role.value}: {email}")
    return user


def main():
    db = SessionLocal()
    try:
        owner = _get_or_create_user(db, OWNER_EMAIL, OWNER_PASSWORD, UserRole.property_owner, "Owner")
        _get_or_create_user(db, GUEST_EMAIL, GUEST_PASSWORD, UserRole.guest, "Guest")

        if db.query(Property).filter(Property.owner_id == owner.id).first() is None:
            db.add(Property(
                owner_id=owner.id,
                title="Seaside Apartment",
                description="Two-bedroom apartment five minutes from the beach.",
                property_type=PropertyType.apartment,
                location="Miami Beach",
                address="123 Ocean Dr",
                city="Miami",
                country="USA",
                postal_code="33139",
                price_per_night=15000,
                max_guests=4,
                bedrooms=2,
                bathrooms=1,
                amenities=["wifi", "kitchen"],
                images=[],
                is_active=True,
            ))
            print("Created demo listing for owner")
        db.commit()
    finally:
        db.close()

    print("\n--- Test credentials ---")
    print(f"Owner: {OWNER_EMAIL} / {OWNER_PASSWORD}")
    print(f"Guest: {GUEST_EMAIL} / {GUEST_PASSWORD}")


if __name__ == "__main__":
    main()
