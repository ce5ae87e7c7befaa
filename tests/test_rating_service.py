"""
Unit tests for the rating aggregator.
"""
import pytest

from app.core.exceptions import AggregateUpdateError, NotFoundError
from app.db.models.hiring_record import HiringRecord, HiringStatus
from app.db.models.review import Review
from app.services.rating_service import (
    compute_rating,
    recompute_employee_rating,
    get_rating_summary,
)


def add_review(db, user, employee, rating, start_date):
    record = HiringRecord(
        user_id=user.id,
        ai_employee_id=employee.id,
        hire_type="hourly",
        rate=40,
        start_date=start_date,
        status=HiringStatus.COMPLETED.value,
    )
    db.add(record)
    db.flush()
    db.add(Review(
        user_id=user.id,
        ai_employee_id=employee.id,
        hiring_record_id=record.id,
        rating=rating,
    ))
    db.commit()


def test_compute_rating_empty():
    assert compute_rating([]) == (0.0, 0)


def test_compute_rating_rounds_to_two_decimals():
    assert compute_rating([5, 4, 4]) == (4.33, 3)
    assert compute_rating([1, 2]) == (1.5, 2)


def test_compute_rating_accepts_generator():
    assert compute_rating(r for r in (3, 3, 3)) == (3.0, 3)


def test_recompute_writes_aggregate(db, user, employee, start_date):
    add_review(db, user, employee, 5, start_date)
    add_review(db, user, employee, 2, start_date)

    assert recompute_employee_rating(db, employee.id) == (3.5, 2)
    db.commit()
    db.refresh(employee)

    assert employee.rating == 3.5
    assert employee.total_reviews == 2


def test_recompute_is_idempotent(db, user, employee, start_date):
    add_review(db, user, employee, 4, start_date)
    add_review(db, user, employee, 5, start_date)

    first = recompute_employee_rating(db, employee.id)
    db.commit()
    second = recompute_employee_rating(db, employee.id)
    db.commit()
    db.refresh(employee)

    assert first == second == (4.5, 2)
    assert (employee.rating, employee.total_reviews) == (4.5, 2)


def test_recompute_resets_to_zero_without_reviews(db, make_employee):
    employee = make_employee(rating=4.8, total_reviews=12)

    assert recompute_employee_rating(db, employee.id) == (0.0, 0)
    db.commit()
    db.refresh(employee)

    assert employee.rating == 0
    assert employee.total_reviews == 0


def test_recompute_unknown_employee_raises(db):
    with pytest.raises(AggregateUpdateError):
        recompute_employee_rating(db, 9999)


def test_rating_summary_distribution(db, user, employee, start_date):
    for rating in (5, 5, 4, 2):
        add_review(db, user, employee, rating, start_date)

    summary = get_rating_summary(db, employee.id)

    assert summary["total_reviews"] == 4
    assert summary["average_rating"] == 4.0
    assert summary["rating_distribution"] == {1: 0, 2: 1, 3: 0, 4: 1, 5: 2}


def test_rating_summary_unknown_employee(db):
    with pytest.raises(NotFoundError):
        get_rating_summary(db, 4242)
