"""
Pydantic schemas for review endpoints.
"""
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.common import EmployeeSummary, Pagination, UserSummary


class ReviewCreate(BaseModel):
    ai_employee_id: int = Field(..., ge=1)
    hiring_record_id: int = Field(..., ge=1)
    rating: int = Field(..., ge=1, le=5, description="Whole stars, 1-5")
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    ai_employee_id: int
    hiring_record_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    ai_employee: Optional[EmployeeSummary] = None

    class Config:
        from_attributes = True


class RatingStatistics(BaseModel):
    average_rating: float
    total_reviews: int
    rating_distribution: Dict[int, int]


class EmployeeReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    pagination: Pagination
    statistics: RatingStatistics


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    pagination: Pagination
