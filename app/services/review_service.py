"""
Review gate.

A review may only be written by the user who made a hiring, for the employee
actually hired, once that hiring is completed, and only once per hiring.
Every review mutation re-derives the employee's rating aggregate before
committing, so both land in one transaction or neither does.
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import (
    DuplicateReviewError,
    InvalidReferenceError,
    NotFoundError,
)
from app.db.models.hiring_record import HiringRecord, HiringStatus
from app.db.models.review import Review
from app.db.repository import Repository
from app.services.rating_service import recompute_employee_rating, get_rating_summary

logger = logging.getLogger(__name__)

# update_review() leaves the comment alone unless one is passed
UNCHANGED = object()


class ReviewService:
    """Service for creating, editing and removing reviews."""

    def __init__(self, db: Session):
        self.db = db
        self.reviews = Repository(db, Review)
        self.records = Repository(db, HiringRecord)

    def _commit_with_aggregate(self, employee_id: int) -> None:
        try:
            recompute_employee_rating(self.db, employee_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def create_review(
        self,
        user_id: int,
        ai_employee_id: int,
        hiring_record_id: int,
        rating: int,
        comment: Optional[str] = None,
    ) -> Review:
        """
        Raises:
            InvalidReferenceError: hiring record missing, not the caller's,
                for another employee, or not completed
            DuplicateReviewError: hiring record already reviewed
        """
        record = self.records.find_one(
            id=hiring_record_id,
            user_id=user_id,
            ai_employee_id=ai_employee_id,
            status=HiringStatus.COMPLETED.value,
        )
        if not record:
            logger.warning(
                f"Review rejected, invalid hiring reference: user_id={user_id}, "
                f"hiring_record_id={hiring_record_id}, ai_employee_id={ai_employee_id}"
            )
            raise InvalidReferenceError()

        if self.reviews.find_one(hiring_record_id=hiring_record_id):
            logger.warning(f"Review rejected, duplicate: hiring_record_id={hiring_record_id}")
            raise DuplicateReviewError()

        try:
            review = self.reviews.add(Review(
                user_id=user_id,
                ai_employee_id=ai_employee_id,
                hiring_record_id=hiring_record_id,
                rating=rating,
                comment=comment,
            ))
        except IntegrityError as e:
            # lost a race against a concurrent review of the same hiring
            self.db.rollback()
            raise DuplicateReviewError() from e

        self._commit_with_aggregate(ai_employee_id)
        logger.info(f"Review created: review_id={review.id}, hiring_record_id={hiring_record_id}, rating={rating}")
        return self.get_review(review.id)

    def get_review(self, review_id: int) -> Review:
        review = (
            self.reviews.query(id=review_id)
            .options(joinedload(Review.user), joinedload(Review.ai_employee))
            .first()
        )
        if not review:
            raise NotFoundError("Review not found")
        return review

    def _get_owned(self, review_id: int, user_id: int) -> Review:
        review = self.reviews.find_one(id=review_id, user_id=user_id)
        if not review:
            raise NotFoundError("Review not found")
        return review

    def update_review(
        self,
        review_id: int,
        user_id: int,
        rating: int,
        comment: Any = UNCHANGED,
    ) -> Review:
        """
        Change a review's rating and, when given, its comment.
        
        Passing comment=None clears it; omitting it keeps the stored text.
        """
        review = self._get_owned(review_id, user_id)
        review.rating = rating
        if comment is not UNCHANGED:
            review.comment = comment
        self.db.flush()

        self._commit_with_aggregate(review.ai_employee_id)
        logger.info(f"Review updated: review_id={review_id}, rating={rating}")
        return self.get_review(review_id)

    def delete_review(self, review_id: int, user_id: int) -> None:
        review = self._get_owned(review_id, user_id)
        employee_id = review.ai_employee_id
        self.reviews.delete(review)

        self._commit_with_aggregate(employee_id)
        logger.info(f"Review deleted: review_id={review_id}, ai_employee_id={employee_id}")

    def list_employee_reviews(self, ai_employee_id: int, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """Paginated reviews of one employee plus its rating summary."""
        summary = get_rating_summary(self.db, ai_employee_id)
        query = self.reviews.query(ai_employee_id=ai_employee_id)
        reviews = self.reviews.list(
            query.options(joinedload(Review.user)),
            order_by="created_at",
            offset=(page - 1) * limit,
            limit=limit,
        )
        return {
            "reviews": reviews,
            "total": summary["total_reviews"],
            "page": page,
            "limit": limit,
            "statistics": summary,
        }

    def list_user_reviews(self, user_id: int, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        query = self.reviews.query(user_id=user_id)
        total = self.reviews.count(query)
        reviews = self.reviews.list(
            query.options(joinedload(Review.ai_employee), joinedload(Review.hiring_record)),
            order_by="created_at",
            offset=(page - 1) * limit,
            limit=limit,
        )
        return {"reviews": reviews, "total": total, "page": page, "limit": limit}
