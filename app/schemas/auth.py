"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import validate_password_bytes
from app.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Request schema for user registration."""
    email: EmailStr = Field(..., description="User's email address")
    username: str = Field(..., min_length=2, max_length=50, description="Public username")
    password: str = Field(..., description="User's password (min 6 characters)")
    phone: Optional[str] = Field(default=None, max_length=20, description="Phone number (optional)")
    
    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return validate_password_bytes(v)
    
    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@example.com",
                "username": "janedoe",
                "password": "SecurePass123",
                "phone": "13800000000"
            }
        }


class LoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None
