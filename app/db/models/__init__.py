"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.user import User, UserRole
from app.db.models.ai_employee import AIEmployee, EmployeeStatus
from app.db.models.hiring_record import HiringRecord, HiringStatus, HireType
from app.db.models.review import Review
from app.db.models.favorite import Favorite

__all__ = [
    "User",
    "UserRole",
    "AIEmployee",
    "EmployeeStatus",
    "HiringRecord",
    "HiringStatus",
    "HireType",
    "Review",
    "Favorite",
]
