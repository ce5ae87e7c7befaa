from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base

class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ai_employee_id = Column(Integer, ForeignKey("ai_employees.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    ai_employee = relationship("AIEmployee")

    __table_args__ = (
        UniqueConstraint("user_id", "ai_employee_id", name="uq_favorites_user_employee"),
    )
