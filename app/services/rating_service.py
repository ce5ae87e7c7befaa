"""
Rating aggregation for AI employees.

An employee's `rating` and `total_reviews` are a cache of its review set.
recompute_employee_rating() must run in the same transaction as every review
create/update/delete so the cache is never observed out of date.
"""
import logging
from typing import Dict, Iterable, Tuple
from sqlalchemy.orm import Session

from app.core.exceptions import AggregateUpdateError, NotFoundError
from app.db.models.ai_employee import AIEmployee
from app.db.models.review import Review
from app.db.repository import Repository

logger = logging.getLogger(__name__)

RATING_VALUES = (1, 2, 3, 4, 5)


def compute_rating(ratings: Iterable[int]) -> Tuple[float, int]:
    """
    Aggregate a set of review ratings.
    
    Returns:
        (mean rounded to 2 decimals, count), or (0.0, 0) for no ratings
    """
    values = list(ratings)
    if not values:
        return 0.0, 0
    return round(sum(values) / len(values), 2), len(values)


def get_employee_ratings(db: Session, employee_id: int) -> list:
    rows = db.query(Review.rating).filter(Review.ai_employee_id == employee_id).all()
    return [rating for (rating,) in rows]


def recompute_employee_rating(db: Session, employee_id: int) -> Tuple[float, int]:
    """
    Re-derive and stage rating/total_reviews for one employee.
    
    Does not commit; the caller commits together with the review change.
    
    Raises:
        AggregateUpdateError: if the aggregate could not be written
    """
    try:
        rating, total = compute_rating(get_employee_ratings(db, employee_id))
        affected = Repository(db, AIEmployee).update_where(
            {"rating": rating, "total_reviews": total},
            id=employee_id,
        )
    except Exception as e:
        logger.error(f"Rating recompute failed: ai_employee_id={employee_id}: {e}", exc_info=True)
        raise AggregateUpdateError() from e

    if affected == 0:
        logger.error(f"Rating recompute found no employee: ai_employee_id={employee_id}")
        raise AggregateUpdateError(f"AI employee {employee_id} missing while updating rating")

    logger.info(f"Rating recomputed: ai_employee_id={employee_id}, rating={rating}, total_reviews={total}")
    return rating, total


def get_rating_summary(db: Session, employee_id: int) -> Dict:
    """
    Rating statistics shown next to an employee's review list.
    
    Average is rounded to one decimal for display; the distribution always
    carries every star value.
    """
    if Repository(db, AIEmployee).get(employee_id) is None:
        raise NotFoundError("AI employee not found")

    ratings = get_employee_ratings(db, employee_id)
    distribution = {value: 0 for value in RATING_VALUES}
    for rating in ratings:
        distribution[rating] = distribution.get(rating, 0) + 1

    average = round(sum(ratings) / len(ratings), 1) if ratings else 0.0
    return {
        "average_rating": average,
        "total_reviews": len(ratings),
        "rating_distribution": distribution,
    }
