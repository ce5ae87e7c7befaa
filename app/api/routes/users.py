"""
User profile, favorites and dashboard endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user
from app.db.models.user import User
from app.schemas.user import (
    UserResponse,
    ProfileUpdate,
    PasswordChange,
    FavoriteCreate,
    FavoriteResponse,
    FavoriteListResponse,
    DashboardResponse,
)
from app.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/favorites", response_model=FavoriteListResponse)
def list_favorites(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return FavoriteListResponse.model_validate(
        {"favorites": user_service.list_favorites(db, user.id)}, from_attributes=True
    )


@router.post("/favorites", status_code=status.HTTP_201_CREATED, response_model=FavoriteResponse)
def add_favorite(
    payload: FavoriteCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return user_service.add_favorite(db, user.id, payload.ai_employee_id)


@router.delete("/favorites/{ai_employee_id}")
def remove_favorite(
    ai_employee_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.remove_favorite(db, user.id, ai_employee_id)
    return {"message": "Favorite removed"}


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not payload.has_changes():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No profile fields provided"
        )
    return user_service.update_profile(
        db,
        user,
        username=payload.username,
        phone=payload.phone,
        avatar_url=payload.avatar_url,
    )


@router.put("/password")
def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.change_password(db, user, payload.current_password, payload.new_password)
    return {"message": "Password updated"}


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return DashboardResponse.model_validate(user_service.get_dashboard(db, user.id), from_attributes=True)
    except Exception as e:
        logger.error(f"Failed to build dashboard: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load dashboard"
        )
