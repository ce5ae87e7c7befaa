"""
Summary schemas embedded in several responses.
"""
import math
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class UserSummary(BaseModel):
    id: int
    username: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class EmployeeSummary(BaseModel):
    id: int
    employee_code: str
    name: str
    category: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class ReviewSummary(BaseModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    """Pagination block shared by list responses."""
    page: int = Field(1, description="Current page number")
    limit: int = Field(10, description="Items per page")
    total: int = Field(0, description="Total number of matching items")
    total_pages: int = Field(0, description="Number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit) if limit else 0)


def validate_password_bytes(v: str) -> str:
    """Validate password length in bytes (bcrypt limit is 72 bytes)."""
    password_bytes = v.encode("utf-8")
    if len(password_bytes) > 72:
        raise ValueError("Password too long (bcrypt limit 72 bytes)")
    if len(password_bytes) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v
