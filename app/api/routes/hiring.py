"""
Hiring endpoints.

Thin HTTP layer over HiringService; every operation is scoped to the
authenticated user.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user
from app.core.exceptions import MarketplaceError
from app.db.models.hiring_record import HireType, HiringStatus
from app.db.models.user import User
from app.schemas.common import Pagination
from app.schemas.hiring import (
    HiringCreate,
    HiringStatusUpdate,
    HiringRecordDetail,
    HiringListResponse,
    HiringStatistics,
)
from app.services.hiring_service import HiringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hiring", tags=["Hiring"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=HiringRecordDetail)
def create_hiring(
    payload: HiringCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Hire an available AI employee.
    
    The employee becomes busy until the hiring is completed or cancelled.
    Returns 404 if the employee does not exist or is already hired.
    """
    try:
        record = HiringService(db).create_hiring(
            user_id=user.id,
            ai_employee_id=payload.ai_employee_id,
            hire_type=payload.hire_type.value,
            rate=payload.rate,
            start_date=payload.start_date,
            end_date=payload.end_date,
            task_description=payload.task_description,
        )
        return HiringRecordDetail.model_validate(record)
    except MarketplaceError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create hiring: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create hiring record"
        )


@router.get("/my-records", response_model=HiringListResponse)
def list_my_records(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=50, description="Items per page"),
    status_filter: Optional[HiringStatus] = Query(None, alias="status", description="Filter by status"),
    hire_type: Optional[HireType] = Query(None, description="Filter by hire type"),
    sort_by: str = Query("created_at", description="created_at, start_date, rate, status or total_cost"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        result = HiringService(db).list_records(
            user_id=user.id,
            page=page,
            limit=limit,
            status=status_filter.value if status_filter else None,
            hire_type=hire_type.value if hire_type else None,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        logger.debug(f"Hiring records listed: user_id={user.id}, total={result['total']}, page={page}")
        return HiringListResponse.model_validate(
            {"records": result["records"], "pagination": Pagination.build(page, limit, result["total"])},
            from_attributes=True,
        )
    except Exception as e:
        logger.error(f"Failed to list hiring records: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list hiring records"
        )


@router.get("/statistics", response_model=HiringStatistics)
def get_statistics(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return HiringStatistics(**HiringService(db).get_statistics(user.id))
    except Exception as e:
        logger.error(f"Failed to compute hiring statistics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get statistics"
        )


@router.get("/{hiring_id}", response_model=HiringRecordDetail)
def get_hiring(
    hiring_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return HiringRecordDetail.model_validate(HiringService(db).get_record(hiring_id, user.id))


@router.patch("/{hiring_id}/status", response_model=HiringRecordDetail)
def update_hiring_status(
    hiring_id: int,
    payload: HiringStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Complete or cancel an active hiring.
    
    Either terminal state releases the employee. Any other transition is
    rejected with 409.
    """
    try:
        record = HiringService(db).update_status(
            hiring_id=hiring_id,
            user_id=user.id,
            new_status=payload.status,
            total_cost=payload.total_cost,
        )
        return HiringRecordDetail.model_validate(record)
    except MarketplaceError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update hiring status: hiring_id={hiring_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update hiring status"
        )
