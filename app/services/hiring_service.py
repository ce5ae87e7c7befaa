"""
Hiring lifecycle management.

Owns the hiring-record state machine and keeps each AI employee's
availability in step with its open engagement:

    active --> completed
    active --> cancelled

Creating a hiring flips the employee available -> busy with a single
conditional UPDATE, so two concurrent hirers cannot both win. Entering a
terminal state flips it back.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import InvalidTransitionError, NotFoundError
from app.db.models.ai_employee import AIEmployee, EmployeeStatus
from app.db.models.hiring_record import HiringRecord, HiringStatus
from app.db.models.review import Review
from app.db.repository import Repository

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[HiringStatus, FrozenSet[HiringStatus]] = {
    HiringStatus.ACTIVE: frozenset({HiringStatus.COMPLETED, HiringStatus.CANCELLED}),
    HiringStatus.COMPLETED: frozenset(),
    HiringStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

SORTABLE_FIELDS = ("created_at", "start_date", "rate", "status", "total_cost")


def can_transition(current: HiringStatus, requested: HiringStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS.get(current, frozenset())


class HiringService:
    """Service for creating and transitioning hiring records."""
    
    def __init__(self, db: Session):
        self.db = db
        self.records = Repository(db, HiringRecord)
        self.employees = Repository(db, AIEmployee)
    
    def create_hiring(
        self,
        user_id: int,
        ai_employee_id: int,
        hire_type: str,
        rate: float,
        start_date: datetime,
        end_date: Optional[datetime] = None,
        task_description: Optional[str] = None,
    ) -> HiringRecord:
        """
        Hire an available AI employee.
        
        Raises:
            NotFoundError: employee missing or not available; nothing is written
        """
        claimed = self.employees.update_where(
            {"status": EmployeeStatus.BUSY.value},
            id=ai_employee_id,
            status=EmployeeStatus.AVAILABLE.value,
        )
        if claimed == 0:
            self.db.rollback()
            logger.warning(f"Hiring rejected, employee unavailable: ai_employee_id={ai_employee_id}, user_id={user_id}")
            raise NotFoundError("AI employee not found or not available")
        
        record = self.records.add(HiringRecord(
            user_id=user_id,
            ai_employee_id=ai_employee_id,
            hire_type=hire_type,
            rate=rate,
            start_date=start_date,
            end_date=end_date,
            task_description=task_description,
            status=HiringStatus.ACTIVE.value,
        ))
        self.db.commit()
        
        logger.info(f"Hiring created: hiring_id={record.id}, user_id={user_id}, ai_employee_id={ai_employee_id}")
        return self.get_record(record.id, user_id)
    
    def _get_owned(self, hiring_id: int, user_id: int) -> HiringRecord:
        record = self.records.find_one(id=hiring_id, user_id=user_id)
        if not record:
            raise NotFoundError("Hiring record not found")
        return record
    
    def get_record(self, hiring_id: int, user_id: int) -> HiringRecord:
        """Fetch a hiring record with its employee, user and review, scoped to the owner."""
        record = (
            self.records.query(id=hiring_id, user_id=user_id)
            .options(
                joinedload(HiringRecord.ai_employee),
                joinedload(HiringRecord.user),
                joinedload(HiringRecord.review),
            )
            .first()
        )
        if not record:
            raise NotFoundError("Hiring record not found")
        return record
    
    def update_status(
        self,
        hiring_id: int,
        user_id: int,
        new_status: HiringStatus,
        total_cost: Optional[float] = None,
    ) -> HiringRecord:
        """
        Move a hiring record to a new status.
        
        Raises:
            NotFoundError: record missing or owned by someone else
            InvalidTransitionError: transition not in ALLOWED_TRANSITIONS, or the
                record left `current` before the write landed
        """
        new_status = HiringStatus(new_status)
        record = self._get_owned(hiring_id, user_id)
        current = HiringStatus(record.status)
        
        if not can_transition(current, new_status):
            logger.warning(
                f"Rejected hiring transition: hiring_id={hiring_id}, "
                f"{current.value} -> {new_status.value}"
            )
            raise InvalidTransitionError(current.value, new_status.value)
        
        values = {"status": new_status.value}
        if total_cost is not None:
            values["total_cost"] = total_cost
        if new_status == HiringStatus.COMPLETED:
            values["end_date"] = datetime.now(timezone.utc)
        
        # compare-and-set on the status the transition was checked against
        moved = self.records.update_where(values, id=hiring_id, user_id=user_id, status=current.value)
        if moved == 0:
            self.db.rollback()
            latest = self._get_owned(hiring_id, user_id)
            logger.warning(
                f"Hiring transition lost a race: hiring_id={hiring_id}, "
                f"expected {current.value}, found {latest.status}"
            )
            raise InvalidTransitionError(latest.status, new_status.value)
        
        if new_status in TERMINAL_STATUSES:
            released = self.employees.update_where(
                {"status": EmployeeStatus.AVAILABLE.value},
                id=record.ai_employee_id,
                status=EmployeeStatus.BUSY.value,
            )
            if released == 0:
                logger.warning(f"Employee was not busy on release: ai_employee_id={record.ai_employee_id}")
        
        self.db.commit()
        logger.info(f"Hiring status updated: hiring_id={hiring_id}, {current.value} -> {new_status.value}")
        return self.get_record(hiring_id, user_id)
    
    def list_records(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        hire_type: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        """Paginated hiring history for one user; total honours the filters."""
        if sort_by not in SORTABLE_FIELDS:
            sort_by = "created_at"
        
        query = self.records.query(user_id=user_id, status=status, hire_type=hire_type)
        total = self.records.count(query)
        records = self.records.list(
            query.options(joinedload(HiringRecord.ai_employee)),
            order_by=sort_by,
            descending=sort_order != "asc",
            offset=(page - 1) * limit,
            limit=limit,
        )
        return {
            "records": records,
            "total": total,
            "page": page,
            "limit": limit,
        }
    
    def get_statistics(self, user_id: int) -> Dict[str, Any]:
        """Hiring totals and the caller's average given rating."""
        total_hires = self.records.count(user_id=user_id)
        active_count = self.records.count(user_id=user_id, status=HiringStatus.ACTIVE.value)
        total_cost = (
            self.db.query(func.coalesce(func.sum(HiringRecord.total_cost), 0))
            .filter(HiringRecord.user_id == user_id)
            .scalar()
        )
        average_rating = (
            self.db.query(func.avg(Review.rating))
            .filter(Review.user_id == user_id)
            .scalar()
        )
        return {
            "total_hires": total_hires,
            "total_cost": float(total_cost or 0),
            "active_count": active_count,
            "average_rating": round(float(average_rating), 1) if average_rating is not None else 0.0,
        }
