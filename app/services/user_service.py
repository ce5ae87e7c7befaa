"""
User profile, favorites and dashboard operations.
"""
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConflictError, InvalidPasswordError, NotFoundError
from app.core.security import hash_password, verify_password
from app.db.models.ai_employee import AIEmployee
from app.db.models.favorite import Favorite
from app.db.models.hiring_record import HiringRecord, HiringStatus
from app.db.models.review import Review
from app.db.models.user import User
from app.db.repository import Repository

logger = logging.getLogger(__name__)

DASHBOARD_RECENT_HIRES = 5
DASHBOARD_FAVORITES = 6
DASHBOARD_PENDING_REVIEWS = 3


def update_profile(
    db: Session,
    user: User,
    username: Optional[str] = None,
    phone: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    if username and username != user.username:
        if Repository(db, User).find_one(username=username):
            raise ConflictError("Username already taken")
        user.username = username
    if phone:
        user.phone = phone
    if avatar_url:
        user.avatar_url = avatar_url
    
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username already taken") from e
    
    db.refresh(user)
    logger.info(f"Profile updated: user_id={user.id}")
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        logger.warning(f"Password change rejected, wrong current password: user_id={user.id}")
        raise InvalidPasswordError()
    
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info(f"Password changed: user_id={user.id}")


def list_favorites(db: Session, user_id: int) -> List[Favorite]:
    repo = Repository(db, Favorite)
    query = repo.query(user_id=user_id).options(joinedload(Favorite.ai_employee))
    return repo.list(query, order_by="created_at")


def add_favorite(db: Session, user_id: int, ai_employee_id: int) -> Favorite:
    repo = Repository(db, Favorite)
    if repo.find_one(user_id=user_id, ai_employee_id=ai_employee_id):
        raise ConflictError("AI employee already in favorites")
    if Repository(db, AIEmployee).get(ai_employee_id) is None:
        raise NotFoundError("AI employee not found")
    
    try:
        favorite = repo.add(Favorite(user_id=user_id, ai_employee_id=ai_employee_id))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("AI employee already in favorites") from e
    
    db.refresh(favorite)
    logger.info(f"Favorite added: user_id={user_id}, ai_employee_id={ai_employee_id}")
    return favorite


def remove_favorite(db: Session, user_id: int, ai_employee_id: int) -> None:
    repo = Repository(db, Favorite)
    favorite = repo.find_one(user_id=user_id, ai_employee_id=ai_employee_id)
    if not favorite:
        raise NotFoundError("Favorite not found")
    repo.delete(favorite)
    db.commit()
    logger.info(f"Favorite removed: user_id={user_id}, ai_employee_id={ai_employee_id}")


def get_dashboard(db: Session, user_id: int) -> Dict[str, Any]:
    """Recent hires, favorite employees and completed hires still awaiting a review."""
    records = Repository(db, HiringRecord)
    recent_hires = records.list(
        records.query(user_id=user_id).options(joinedload(HiringRecord.ai_employee)),
        order_by="created_at",
        limit=DASHBOARD_RECENT_HIRES,
    )
    
    favorites = Repository(db, Favorite)
    favorite_rows = favorites.list(
        favorites.query(user_id=user_id).options(joinedload(Favorite.ai_employee)),
        order_by="created_at",
        limit=DASHBOARD_FAVORITES,
    )
    
    reviewed = select(Review.hiring_record_id).where(Review.user_id == user_id)
    pending_query = (
        records.query(user_id=user_id, status=HiringStatus.COMPLETED.value)
        .filter(HiringRecord.id.notin_(reviewed))
        .options(joinedload(HiringRecord.ai_employee))
    )
    pending_reviews = records.list(pending_query, order_by="created_at", limit=DASHBOARD_PENDING_REVIEWS)
    
    return {
        "recent_hires": recent_hires,
        "favorite_employees": [favorite.ai_employee for favorite in favorite_rows],
        "pending_reviews": pending_reviews,
    }
