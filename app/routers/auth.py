"""Registration and login."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.config import Settings, get_settings
from app.database import get_db
from app.dependencies import get_current_db_user
from app.models.user import User, UserRole
from app.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from app.services.auth import create_access_token, get_password_hash, verify_password
from app.services.errors import AuthenticationFailed, InvalidRequest

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def create_user_account(db: Session, data: UserCreate, role: UserRole) -> User:
    """Insert a new user with the given role. Email is unique across all roles."""
    email = _normalize_email(data.email)
    if db.query(User).filter(User.email == email).first():
        raise InvalidRequest("User with this email already exists")
    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise InvalidRequest("User with this email already exists")
    db.refresh(user)
    log.info("Created %s account %s (id=%s)", role.value, email, user.id)
    return user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserCreate, db: Session = Depends(get_db)):
    # Self-registration always yields a guest; owners are provisioned by an admin
    user = create_user_account(db, data, UserRole.guest)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = db.query(User).filter(User.email == _normalize_email(data.email)).first()
    if not user or not verify_password(data.password, user.hashed_password):
        raise AuthenticationFailed("Invalid email or password")
    if not user.is_active:
        raise AuthenticationFailed("Account is deactivated")
    token = create_access_token(settings, user.id, user.email, user.role)
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_db_user)):
    return UserResponse.model_validate(user)
