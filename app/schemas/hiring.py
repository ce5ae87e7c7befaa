"""
Pydantic schemas for hiring endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator

from app.db.models.hiring_record import HireType, HiringStatus
from app.schemas.common import EmployeeSummary, Pagination, ReviewSummary, UserSummary


class HiringCreate(BaseModel):
    """Schema for hiring an AI employee."""
    ai_employee_id: int = Field(..., ge=1, description="AI employee to hire")
    hire_type: HireType = Field(..., description="hourly | monthly")
    rate: float = Field(..., ge=0, description="Agreed rate")
    start_date: datetime = Field(..., description="ISO 8601 start date")
    end_date: Optional[datetime] = Field(None, description="Planned end date")
    task_description: Optional[str] = Field(None, max_length=5000)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is None:
            return self
        if (self.start_date.tzinfo is None) != (self.end_date.tzinfo is None):
            raise ValueError("start_date and end_date must both carry a timezone or both omit it")
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "ai_employee_id": 1,
                "hire_type": "monthly",
                "rate": 6000,
                "start_date": "2026-02-01T09:00:00Z",
                "task_description": "Weekly sales dashboards"
            }
        }


class HiringStatusUpdate(BaseModel):
    status: HiringStatus = Field(..., description="active | completed | cancelled")
    total_cost: Optional[float] = Field(None, ge=0, description="Final cost, recorded when given")


class HiringRecordResponse(BaseModel):
    id: int
    user_id: int
    ai_employee_id: int
    hire_type: str
    rate: float
    start_date: datetime
    end_date: Optional[datetime] = None
    task_description: Optional[str] = None
    status: str
    total_cost: Optional[float] = None
    created_at: datetime
    updated_at: datetime
    ai_employee: Optional[EmployeeSummary] = None

    class Config:
        from_attributes = True


class HiringRecordDetail(HiringRecordResponse):
    user: Optional[UserSummary] = None
    review: Optional[ReviewSummary] = None


class HiringListResponse(BaseModel):
    records: List[HiringRecordResponse]
    pagination: Pagination


class HiringStatistics(BaseModel):
    total_hires: int = Field(0, description="Number of hiring records")
    total_cost: float = Field(0, description="Sum of recorded total costs")
    active_count: int = Field(0, description="Hires currently active")
    average_rating: float = Field(0, description="Mean rating the user has given")
