"""
Pydantic schemas for user profile, favorites and dashboard endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import EmployeeSummary, validate_password_bytes


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    role: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """At least one field must be supplied."""
    username: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=r"^\+?[0-9\- ]{6,20}$")
    avatar_url: Optional[str] = Field(None, pattern=r"^https?://\S+$")

    def has_changes(self) -> bool:
        return any(value for value in (self.username, self.phone, self.avatar_url))


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., description="New password (min 6 characters)")

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return validate_password_bytes(v)


class FavoriteCreate(BaseModel):
    ai_employee_id: int = Field(..., ge=1)


class FavoriteEmployee(EmployeeSummary):
    hourly_rate: float
    monthly_rate: float
    rating: float
    total_reviews: int


class FavoriteResponse(BaseModel):
    id: int
    ai_employee_id: int
    created_at: datetime
    ai_employee: FavoriteEmployee

    class Config:
        from_attributes = True


class FavoriteListResponse(BaseModel):
    favorites: List[FavoriteResponse]


class DashboardHire(BaseModel):
    id: int
    status: str
    hire_type: str
    created_at: datetime
    ai_employee: EmployeeSummary

    class Config:
        from_attributes = True


class DashboardResponse(BaseModel):
    recent_hires: List[DashboardHire]
    favorite_employees: List[FavoriteEmployee]
    pending_reviews: List[DashboardHire]
