"""
Unit tests for the hiring state machine and employee availability.
"""
import pytest

from app.core.exceptions import InvalidTransitionError, NotFoundError
from app.db.models.ai_employee import AIEmployee, EmployeeStatus
from app.db.models.hiring_record import HiringRecord, HiringStatus
from app.services.hiring_service import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    HiringService,
    can_transition,
)


def hire(db, user, employee, start_date, **kwargs):
    params = dict(
        user_id=user.id,
        ai_employee_id=employee.id,
        hire_type="hourly",
        rate=45.0,
        start_date=start_date,
    )
    params.update(kwargs)
    return HiringService(db).create_hiring(**params)


def test_transition_table():
    assert can_transition(HiringStatus.ACTIVE, HiringStatus.COMPLETED)
    assert can_transition(HiringStatus.ACTIVE, HiringStatus.CANCELLED)
    assert not can_transition(HiringStatus.ACTIVE, HiringStatus.ACTIVE)
    assert not can_transition(HiringStatus.COMPLETED, HiringStatus.ACTIVE)
    assert not can_transition(HiringStatus.CANCELLED, HiringStatus.COMPLETED)
    assert TERMINAL_STATUSES == {HiringStatus.COMPLETED, HiringStatus.CANCELLED}
    assert set(ALLOWED_TRANSITIONS) == set(HiringStatus)


def test_create_hiring_marks_employee_busy(db, user, employee, start_date):
    record = hire(db, user, employee, start_date, task_description="Quarterly report")

    assert record.status == HiringStatus.ACTIVE.value
    assert record.user_id == user.id
    assert record.task_description == "Quarterly report"
    assert record.end_date is None
    assert record.ai_employee.id == employee.id

    db.refresh(employee)
    assert employee.status == EmployeeStatus.BUSY.value


def test_create_hiring_busy_employee_rejected(db, user, other_user, employee, start_date):
    hire(db, user, employee, start_date)

    with pytest.raises(NotFoundError):
        hire(db, other_user, employee, start_date)

    assert db.query(HiringRecord).count() == 1


def test_create_hiring_preexisting_busy_employee_rejected(db, user, make_employee, start_date):
    busy = make_employee(status=EmployeeStatus.BUSY.value)

    with pytest.raises(NotFoundError):
        hire(db, user, busy, start_date)

    assert db.query(HiringRecord).count() == 0


def test_create_hiring_unknown_employee(db, user, start_date):
    with pytest.raises(NotFoundError):
        HiringService(db).create_hiring(
            user_id=user.id,
            ai_employee_id=404,
            hire_type="hourly",
            rate=10,
            start_date=start_date,
        )


def test_complete_releases_employee_and_stamps_end_date(db, user, employee, start_date):
    record = hire(db, user, employee, start_date)

    updated = HiringService(db).update_status(
        record.id, user.id, HiringStatus.COMPLETED, total_cost=360.0
    )

    assert updated.status == HiringStatus.COMPLETED.value
    assert updated.total_cost == 360.0
    assert updated.end_date is not None
    db.refresh(employee)
    assert employee.status == EmployeeStatus.AVAILABLE.value


def test_cancel_releases_employee(db, user, employee, start_date):
    record = hire(db, user, employee, start_date)

    updated = HiringService(db).update_status(record.id, user.id, "cancelled")

    assert updated.status == HiringStatus.CANCELLED.value
    assert updated.end_date is None
    assert updated.total_cost is None
    db.refresh(employee)
    assert employee.status == EmployeeStatus.AVAILABLE.value


def test_employee_can_be_rehired_after_release(db, user, other_user, employee, start_date):
    first = hire(db, user, employee, start_date)
    HiringService(db).update_status(first.id, user.id, HiringStatus.CANCELLED)

    second = hire(db, other_user, employee, start_date)

    assert second.status == HiringStatus.ACTIVE.value
    db.refresh(employee)
    assert employee.status == EmployeeStatus.BUSY.value


@pytest.mark.parametrize("terminal", [HiringStatus.COMPLETED, HiringStatus.CANCELLED])
@pytest.mark.parametrize("requested", list(HiringStatus))
def test_terminal_records_reject_every_transition(db, user, employee, start_date, terminal, requested):
    record = hire(db, user, employee, start_date)
    service = HiringService(db)
    service.update_status(record.id, user.id, terminal)

    with pytest.raises(InvalidTransitionError):
        service.update_status(record.id, user.id, requested)

    db.expire_all()
    assert db.get(HiringRecord, record.id).status == terminal.value


def test_active_to_active_rejected(db, user, employee, start_date):
    record = hire(db, user, employee, start_date)

    with pytest.raises(InvalidTransitionError) as exc_info:
        HiringService(db).update_status(record.id, user.id, HiringStatus.ACTIVE)

    assert exc_info.value.current == "active"
    assert exc_info.value.requested == "active"
    db.refresh(employee)
    assert employee.status == EmployeeStatus.BUSY.value


def test_update_status_other_users_record_not_found(db, user, other_user, employee, start_date):
    record = hire(db, user, employee, start_date)

    with pytest.raises(NotFoundError):
        HiringService(db).update_status(record.id, other_user.id, HiringStatus.COMPLETED)

    db.expire_all()
    assert db.get(HiringRecord, record.id).status == HiringStatus.ACTIVE.value


def test_get_record_scoped_to_owner(db, user, other_user, employee, start_date):
    record = hire(db, user, employee, start_date)
    service = HiringService(db)

    assert service.get_record(record.id, user.id).id == record.id
    with pytest.raises(NotFoundError):
        service.get_record(record.id, other_user.id)


def test_list_records_filters_and_total(db, user, other_user, make_employee, start_date):
    service = HiringService(db)
    employees = [make_employee(name=f"Agent {i}") for i in range(3)]
    records = [hire(db, user, e, start_date) for e in employees]
    service.update_status(records[0].id, user.id, HiringStatus.COMPLETED)
    hire(db, other_user, make_employee(name="Agent X"), start_date)

    everything = service.list_records(user.id)
    assert everything["total"] == 3

    active = service.list_records(user.id, status="active")
    assert active["total"] == 2
    assert {r.status for r in active["records"]} == {"active"}

    paged = service.list_records(user.id, page=2, limit=2)
    assert paged["total"] == 3
    assert len(paged["records"]) == 1


def test_list_records_sort_by_rate(db, user, make_employee, start_date):
    service = HiringService(db)
    for rate in (30, 10, 20):
        hire(db, user, make_employee(name=f"Rate {rate}"), start_date, rate=rate)

    ascending = service.list_records(user.id, sort_by="rate", sort_order="asc")
    assert [r.rate for r in ascending["records"]] == [10, 20, 30]

    fallback = service.list_records(user.id, sort_by="password_hash")
    assert fallback["total"] == 3


def test_statistics(db, user, make_employee, start_date):
    service = HiringService(db)
    first = hire(db, user, make_employee(name="One"), start_date)
    hire(db, user, make_employee(name="Two"), start_date)
    service.update_status(first.id, user.id, HiringStatus.COMPLETED, total_cost=120.5)

    stats = service.get_statistics(user.id)

    assert stats == {
        "total_hires": 2,
        "total_cost": 120.5,
        "active_count": 1,
        "average_rating": 0.0,
    }


def test_two_sessions_cannot_both_hire_the_same_employee(db, other_db, user, other_user, employee, start_date):
    first_view = db.get(AIEmployee, employee.id)
    second_view = other_db.get(AIEmployee, employee.id)
    assert first_view.status == second_view.status == EmployeeStatus.AVAILABLE.value

    hire(db, user, employee, start_date)

    with pytest.raises(NotFoundError):
        HiringService(other_db).create_hiring(
            user_id=other_user.id,
            ai_employee_id=employee.id,
            hire_type="hourly",
            rate=45.0,
            start_date=start_date,
        )

    db.expire_all()
    assert db.query(HiringRecord).count() == 1
    assert db.get(AIEmployee, employee.id).status == EmployeeStatus.BUSY.value


def test_stale_read_cannot_move_terminal_record(db, other_db, user, employee, start_date):
    record = hire(db, user, employee, start_date)
    assert db.get(HiringRecord, record.id).status == HiringStatus.ACTIVE.value

    HiringService(other_db).update_status(record.id, user.id, HiringStatus.COMPLETED)

    with pytest.raises(InvalidTransitionError) as exc_info:
        HiringService(db).update_status(record.id, user.id, HiringStatus.CANCELLED)

    assert exc_info.value.current == HiringStatus.COMPLETED.value
    db.expire_all()
    assert db.get(HiringRecord, record.id).status == HiringStatus.COMPLETED.value
    assert db.get(AIEmployee, employee.id).status == EmployeeStatus.AVAILABLE.value
