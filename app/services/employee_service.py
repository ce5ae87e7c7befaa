"""
AI employee catalogue: browsing, detail and admin maintenance.
"""
import logging
from typing import Any, Dict, Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.db.models.ai_employee import AIEmployee, EmployeeStatus
from app.db.models.review import Review
from app.db.repository import Repository

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("created_at", "hourly_rate", "monthly_rate", "rating", "total_reviews", "name")

FEATURED_MIN_RATING = 4.0
FEATURED_LIMIT = 8
DETAIL_REVIEW_LIMIT = 10

# Aggregates belong to rating_service; status belongs to hiring_service
PROTECTED_FIELDS = {"id", "rating", "total_reviews", "status"}


def escape_like(text: str) -> str:
    """Make % and _ in user input match literally in a LIKE pattern escaped with a backslash."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_employees(
    db: Session,
    page: int = 1,
    limit: int = 12,
    category: Optional[str] = None,
    status: Optional[str] = None,
    min_rate: Optional[float] = None,
    max_rate: Optional[float] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> Dict[str, Any]:
    """
    Filtered, sorted, paginated employee listing.
    
    Rate bounds apply to the hourly rate. Search matches name or description,
    case-insensitively.
    """
    repo = Repository(db, AIEmployee)
    query = repo.query(category=category, status=status)
    
    if min_rate is not None:
        query = query.filter(AIEmployee.hourly_rate >= min_rate)
    if max_rate is not None:
        query = query.filter(AIEmployee.hourly_rate <= max_rate)
    if search:
        search_term = f"%{escape_like(search)}%"
        query = query.filter(
            or_(
                AIEmployee.name.ilike(search_term, escape="\\"),
                AIEmployee.description.ilike(search_term, escape="\\")
            )
        )
    
    if sort_by not in SORTABLE_FIELDS:
        sort_by = "created_at"
    
    total = repo.count(query)
    employees = repo.list(
        query,
        order_by=sort_by,
        descending=sort_order != "asc",
        offset=(page - 1) * limit,
        limit=limit,
    )
    logger.debug(f"Employees listed: total={total}, page={page}")
    return {"employees": employees, "total": total, "page": page, "limit": limit}


def get_employee(db: Session, employee_id: int) -> AIEmployee:
    employee = Repository(db, AIEmployee).get(employee_id)
    if not employee:
        raise NotFoundError("AI employee not found")
    return employee


def get_recent_reviews(db: Session, employee_id: int, limit: int = DETAIL_REVIEW_LIMIT):
    repo = Repository(db, Review)
    return repo.list(repo.query(ai_employee_id=employee_id), order_by="created_at", limit=limit)


def get_featured(db: Session):
    """Best-rated employees that can be hired right now."""
    repo = Repository(db, AIEmployee)
    query = repo.query(status=EmployeeStatus.AVAILABLE.value).filter(
        AIEmployee.rating >= FEATURED_MIN_RATING
    )
    return repo.list(query, order_by="rating", limit=FEATURED_LIMIT)


def create_employee(db: Session, data: Dict[str, Any]) -> AIEmployee:
    repo = Repository(db, AIEmployee)
    if repo.find_one(employee_code=data["employee_code"]):
        raise ConflictError("Employee code already exists")
    
    values = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
    try:
        employee = repo.add(AIEmployee(**values))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Employee code already exists") from e
    
    db.refresh(employee)
    logger.info(f"AI employee created: ai_employee_id={employee.id}, code={employee.employee_code}")
    return employee


def update_employee(db: Session, employee_id: int, data: Dict[str, Any]) -> AIEmployee:
    employee = get_employee(db, employee_id)
    repo = Repository(db, AIEmployee)
    
    code = data.get("employee_code")
    if code and code != employee.employee_code and repo.find_one(employee_code=code):
        raise ConflictError("Employee code already exists")
    
    for key, value in data.items():
        if key in PROTECTED_FIELDS:
            continue
        setattr(employee, key, value)
    
    db.commit()
    db.refresh(employee)
    logger.info(f"AI employee updated: ai_employee_id={employee.id}, fields={sorted(data)}")
    return employee
