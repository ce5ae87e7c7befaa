"""
AI employee catalogue endpoints.

Browsing is public; creating and editing listings requires an admin.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, require_admin
from app.core.exceptions import MarketplaceError
from app.db.models.ai_employee import EmployeeStatus
from app.db.models.user import User
from app.schemas.ai_employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
    EmployeeDetailResponse,
    EmployeeListResponse,
    EmployeeReview,
    FeaturedEmployeesResponse,
)
from app.schemas.common import Pagination
from app.services import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai-employees", tags=["AI Employees"])


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(12, ge=1, le=50, description="Items per page"),
    category: Optional[str] = Query(None, description="Filter by category"),
    status_filter: Optional[EmployeeStatus] = Query(None, alias="status", description="available | busy"),
    min_rate: Optional[float] = Query(None, ge=0, description="Minimum hourly rate"),
    max_rate: Optional[float] = Query(None, ge=0, description="Maximum hourly rate"),
    search: Optional[str] = Query(None, description="Search in name and description"),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db)
):
    try:
        result = employee_service.list_employees(
            db,
            page=page,
            limit=limit,
            category=category,
            status=status_filter.value if status_filter else None,
            min_rate=min_rate,
            max_rate=max_rate,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return EmployeeListResponse.model_validate(
            {"employees": result["employees"], "pagination": Pagination.build(page, limit, result["total"])},
            from_attributes=True,
        )
    except Exception as e:
        logger.error(f"Failed to list AI employees: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list AI employees"
        )


@router.get("/featured", response_model=FeaturedEmployeesResponse)
def featured_employees(db: Session = Depends(get_db)):
    """Top-rated employees that are available now."""
    return FeaturedEmployeesResponse.model_validate(
        {"employees": employee_service.get_featured(db)}, from_attributes=True
    )


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    employee = employee_service.get_employee(db, employee_id)
    reviews = [
        EmployeeReview.model_validate(review)
        for review in employee_service.get_recent_reviews(db, employee_id)
    ]
    return EmployeeDetailResponse(**EmployeeResponse.model_validate(employee).model_dump(), reviews=reviews)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EmployeeResponse)
def create_employee(
    payload: EmployeeCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        employee = employee_service.create_employee(db, payload.model_dump())
        logger.info(f"AI employee created by admin: admin_id={admin.id}, ai_employee_id={employee.id}")
        return employee
    except MarketplaceError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create AI employee: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create AI employee"
        )


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return employee_service.update_employee(db, employee_id, payload.model_dump(exclude_unset=True))
    except MarketplaceError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update AI employee: ai_employee_id={employee_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update AI employee"
        )
