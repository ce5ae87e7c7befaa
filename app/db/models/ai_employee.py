"""
AI employee listing model.
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class EmployeeStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"


class AIEmployee(Base):
    """
    A hireable AI employee listing.
    
    `rating` and `total_reviews` are derived from the employee's reviews by
    app.services.rating_service and are never written from client input.
    """
    __tablename__ = "ai_employees"

    id = Column(Integer, primary_key=True, index=True)
    employee_code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False, index=True)
    category = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    
    # Pricing (descriptive only, nothing is charged)
    hourly_rate = Column(Float, nullable=False, default=0)
    monthly_rate = Column(Float, nullable=False, default=0)
    
    status = Column(String(20), nullable=False, default=EmployeeStatus.AVAILABLE.value, index=True)
    
    # Review aggregate
    rating = Column(Float, nullable=False, default=0)
    total_reviews = Column(Integer, nullable=False, default=0)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    reviews = relationship("Review", back_populates="ai_employee", order_by="Review.created_at.desc()")
    hiring_records = relationship("HiringRecord", back_populates="ai_employee")
    
    __table_args__ = (
        Index("idx_status_rating", "status", "rating"),
    )
    
    def __repr__(self):
        return f"<AIEmployee(id={self.id}, name='{self.name}', status='{self.status}')>"
