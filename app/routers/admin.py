"""Admin: provisioning property owners and deactivating accounts."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User, UserRole
from app.routers.auth import create_user_account
from app.schemas.auth import UserCreate, UserResponse
from app.services.errors import InvalidRequest, NotFound
from app.services.identity import AuthUser
from app.services.policy import Action, authorize

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.post("/property-owners", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_property_owner(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    authorize(current_user, Action.provision_owner)
    user = create_user_account(db, data, UserRole.property_owner)
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/deactivate", response_model=UserResponse)
def deactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    authorize(current_user, Action.manage_users)
    if user_id == current_user.id:
        raise InvalidRequest("You cannot deactivate your own account")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    if user.is_active:
        user.is_active = False
        db.commit()
        db.refresh(user)
        log.info("Admin %s deactivated user %s", current_user.id, user.id)
    return UserResponse.model_validate(user)
