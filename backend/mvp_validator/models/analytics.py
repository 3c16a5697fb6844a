from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer

from ..database import Base


class Analytics(Base):
    """Declared for campaign metrics; no handler writes it yet."""

    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    page_views = Column(Integer, nullable=False, default=0)
    bounce_rate = Column(Float, nullable=False, default=0.0)
    email_signups = Column(Integer, nullable=False, default=0)
    conversions = Column(Integer, nullable=False, default=0)
    cost_per_acquisition = Column(Float, nullable=False, default=0.0)
    demand_score = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
