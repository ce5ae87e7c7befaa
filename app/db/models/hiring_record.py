"""
Hiring record model: one engagement between a user and an AI employee.
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class HiringStatus(str, Enum):
    """Hiring lifecycle states. COMPLETED and CANCELLED are terminal."""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class HireType(str, Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"


class HiringRecord(Base):
    __tablename__ = "hiring_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ai_employee_id = Column(Integer, ForeignKey("ai_employees.id"), nullable=False, index=True)
    
    hire_type = Column(String(20), nullable=False)  # hourly | monthly
    rate = Column(Float, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)  # stamped on completion
    task_description = Column(Text, nullable=True)
    
    status = Column(String(20), nullable=False, default=HiringStatus.ACTIVE.value, index=True)
    total_cost = Column(Float, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    user = relationship("User", backref="hiring_records")
    ai_employee = relationship("AIEmployee", back_populates="hiring_records")
    review = relationship("Review", back_populates="hiring_record", uselist=False)
    
    __table_args__ = (
        Index("idx_hiring_user_status", "user_id", "status"),
    )
    
    def __repr__(self):
        return f"<HiringRecord(id={self.id}, user_id={self.user_id}, ai_employee_id={self.ai_employee_id}, status='{self.status}')>"
