from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Review(Base):
    """
    Review left by a user for a completed hiring record.
    
    At most one review exists per hiring record.
    """
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ai_employee_id = Column(Integer, ForeignKey("ai_employees.id"), nullable=False, index=True)
    hiring_record_id = Column(Integer, ForeignKey("hiring_records.id"), nullable=False, unique=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    user = relationship("User", backref="reviews")
    ai_employee = relationship("AIEmployee", back_populates="reviews")
    hiring_record = relationship("HiringRecord", back_populates="review")
    
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
    
    def __repr__(self):
        return f"<Review(id={self.id}, ai_employee_id={self.ai_employee_id}, rating={self.rating})>"
