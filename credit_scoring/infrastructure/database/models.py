"""SQLAlchemy ORM models for durable score storage"""

from sqlalchemy import Column, DateTime, Index, Integer, JSON, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CreditScoreRecord(Base):
    """Computed credit score; rows are appended, never updated"""

    __tablename__ = "credit_scores"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False, index=True)
    score = Column(Integer, nullable=False)
    grade = Column(Text, nullable=False)
    factors = Column(JSON, nullable=False, default=list)
    recommendation = Column(Text, nullable=False)
    calculated_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_credit_scores_user_id_calculated_at", "user_id", "calculated_at"),
    )
