"""
Pydantic schemas for AI employee endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.common import Pagination, UserSummary


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    category: str = Field(..., min_length=1, max_length=50, description="Category, e.g. tech, finance")
    description: Optional[str] = Field(None, description="Long description")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")
    hourly_rate: float = Field(..., ge=0, description="Hourly price (descriptive)")
    monthly_rate: float = Field(..., ge=0, description="Monthly price (descriptive)")


class EmployeeCreate(EmployeeBase):
    """Schema for creating a listing. Rating fields are derived and cannot be set."""
    employee_code: str = Field(..., min_length=1, max_length=50, description="Unique listing code")

    class Config:
        json_schema_extra = {
            "example": {
                "employee_code": "AI-0001",
                "name": "Data Analyst Alex",
                "category": "tech",
                "description": "Extracts business insight from large datasets",
                "hourly_rate": 50,
                "monthly_rate": 6000
            }
        }


class EmployeeUpdate(BaseModel):
    employee_code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    monthly_rate: Optional[float] = Field(None, ge=0)


class EmployeeResponse(EmployeeBase):
    id: int
    employee_code: str
    status: str = Field(..., description="available | busy")
    rating: float = Field(..., description="Mean review rating, 0 when unreviewed")
    total_reviews: int
    created_at: datetime

    class Config:
        from_attributes = True


class EmployeeReview(BaseModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    user: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class EmployeeDetailResponse(EmployeeResponse):
    reviews: List[EmployeeReview] = Field(default_factory=list, description="Most recent reviews")


class EmployeeListResponse(BaseModel):
    employees: List[EmployeeResponse]
    pagination: Pagination


class FeaturedEmployeesResponse(BaseModel):
    employees: List[EmployeeResponse]
