"""Shared dependencies: DB session, settings, current user, booking orchestrator."""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.config import Settings, get_settings
from app.database import get_db
from app.models.user import User
from app.services.auth import decode_token
from app.services.bookings import BookingOrchestrator
from app.services.errors import AuthenticationFailed
from app.services.identity import AuthUser
from app.services.store import SqlAlchemyStore

security = HTTPBearer(auto_error=False)


def get_current_db_user(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise AuthenticationFailed("Not authenticated")
    payload = decode_token(settings, credentials.credentials or "")
    user = db.query(User).filter(User.id == payload["sub"]).first()
    # Deactivated accounts lose access immediately, even with an unexpired token
    if not user or not user.is_active:
        raise AuthenticationFailed("User not found or inactive")
    return user


def get_current_user(user: User = Depends(get_current_db_user)) -> AuthUser:
    return AuthUser.from_user(user)


def get_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SqlAlchemyStore:
    return SqlAlchemyStore(db, settings)


def get_orchestrator(store: SqlAlchemyStore = Depends(get_store)) -> BookingOrchestrator:
    return BookingOrchestrator(store)
