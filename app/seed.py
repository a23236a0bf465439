"""Seed the bootstrap admin account."""
import logging
from sqlalchemy.orm import Session
from app.config import Settings
from app.models.user import User, UserRole
from app.services.auth import get_password_hash

log = logging.getLogger(__name__)


def seed_admin(db: Session, settings: Settings) -> User | None:
    """Create the admin from settings unless an admin already exists. Skipped without a password."""
    existing = db.query(User).filter(User.role == UserRole.admin).first()
    if existing:
        return existing
    if not settings.admin_password:
        log.warning("No admin account exists and ADMIN_PASSWORD is not set; skipping admin seed")
        return None
    admin = User(
        email=settings.admin_email.strip().lower(),
        hashed_password=get_password_hash(settings.admin_password),
        first_name="Admin",
        last_name="User",
        role=UserRole.admin,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    log.info("Seeded admin account %s", admin.email)
    return admin
