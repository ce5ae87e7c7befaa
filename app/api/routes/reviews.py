"""
Review endpoints.

Every mutation re-derives the reviewed employee's rating aggregate in the
same transaction.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user
from app.core.exceptions import MarketplaceError
from app.db.models.user import User
from app.schemas.common import Pagination
from app.schemas.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewListResponse,
    EmployeeReviewListResponse,
    RatingStatistics,
)
from app.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _internal_error(db: Session, action: str, e: Exception) -> HTTPException:
    db.rollback()
    logger.error(f"Failed to {action}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}"
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReviewResponse)
def create_review(
    payload: ReviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Review a completed hiring.
    
    Returns 400 if the hiring record is not the caller's completed hiring of
    this employee, or if it has already been reviewed.
    """
    try:
        review = ReviewService(db).create_review(
            user_id=user.id,
            ai_employee_id=payload.ai_employee_id,
            hiring_record_id=payload.hiring_record_id,
            rating=payload.rating,
            comment=payload.comment,
        )
        return ReviewResponse.model_validate(review)
    except MarketplaceError:
        raise
    except Exception as e:
        raise _internal_error(db, "create review", e)


@router.get("/my-reviews", response_model=ReviewListResponse)
def list_my_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = ReviewService(db).list_user_reviews(user.id, page=page, limit=limit)
    return ReviewListResponse.model_validate(
        {"reviews": result["reviews"], "pagination": Pagination.build(page, limit, result["total"])},
        from_attributes=True,
    )


@router.get("/employee/{employee_id}", response_model=EmployeeReviewListResponse)
def list_employee_reviews(
    employee_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db)
):
    """Public, paginated reviews of one employee with rating statistics."""
    result = ReviewService(db).list_employee_reviews(employee_id, page=page, limit=limit)
    return EmployeeReviewListResponse.model_validate(
        {
            "reviews": result["reviews"],
            "pagination": Pagination.build(page, limit, result["total"]),
            "statistics": RatingStatistics(**result["statistics"]),
        },
        from_attributes=True,
    )


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: int,
    payload: ReviewUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        review = ReviewService(db).update_review(
            review_id=review_id,
            user_id=user.id,
            **payload.model_dump(exclude_unset=True),
        )
        return ReviewResponse.model_validate(review)
    except MarketplaceError:
        raise
    except Exception as e:
        raise _internal_error(db, "update review", e)


@router.delete("/{review_id}")
def delete_review(
    review_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        ReviewService(db).delete_review(review_id=review_id, user_id=user.id)
    except MarketplaceError:
        raise
    except Exception as e:
        raise _internal_error(db, "delete review", e)
    return {"message": "Review deleted"}
