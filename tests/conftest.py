import os

# Must be set before app modules build the engine / settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BOOKING_COMPLETION_CRON_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base
from app.models import Booking, BookingStatus, Property, PropertyType, User, UserRole
from app.services.auth import create_access_token
from app.services.bookings import BookingOrchestrator
from app.services.store import SqlAlchemyStore


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        booking_lock_timeout_seconds=5,
        booking_completion_cron_enabled=False,
    )


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db, settings):
    return SqlAlchemyStore(db, settings)


@pytest.fixture
def orchestrator(store):
    return BookingOrchestrator(store)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.guest, email: str | None = None, is_active: bool = True) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role.value}{counter['n']}@example.com",
            hashed_password="not-a-real-hash",
            first_name=role.value.title(),
            last_name=str(counter["n"]),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_property(db):
    def _make(owner: User, price_per_night: int = 10000, max_guests: int = 4, **overrides) -> Property:
        fields = dict(
            owner_id=owner.id,
            title="Garden flat",
            description="Quiet flat with a garden",
            property_type=PropertyType.apartment,
            location="Old Town",
            address="1 Main St",
            city="Lisbon",
            country="Portugal",
            postal_code="1100-001",
            price_per_night=price_per_night,
            max_guests=max_guests,
            bedrooms=2,
            bathrooms=1,
            amenities=["wifi"],
            images=[],
            is_active=True,
        )
        fields.update(overrides)
        prop = Property(**fields)
        db.add(prop)
        db.commit()
        db.refresh(prop)
        return prop

    return _make


@pytest.fixture
def make_booking(db):
    """Insert a booking row directly, bypassing the orchestrator (test setup only)."""
    def _make(
        prop: Property,
        guest: User,
        check_in: date,
        check_out: date,
        status: BookingStatus = BookingStatus.pending,
        guest_count: int = 1,
    ) -> Booking:
        booking = Booking(
            property_id=prop.id,
            user_id=guest.id,
            check_in_date=check_in,
            check_out_date=check_out,
            guest_count=guest_count,
            total_price=(check_out - check_in).days * prop.price_per_night,
            status=status,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def owner(make_user) -> User:
    return make_user(UserRole.property_owner)


@pytest.fixture
def guest(make_user) -> User:
    return make_user(UserRole.guest)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(UserRole.admin)


@pytest.fixture
def listing(make_property, owner) -> Property:
    return make_property(owner)


@pytest.fixture
def auth_headers(settings):
    def _headers(user: User) -> dict:
        token = create_access_token(settings, user.id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(session_factory, settings):
    from fastapi.testclient import TestClient

    from app.config import get_settings
    from app.database import get_db
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
