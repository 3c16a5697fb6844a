from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String

from ..database import Base


class Campaign(Base):
    """Declared for the campaign stage; no handler writes it yet."""

    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    platform = Column(String(32), nullable=False, default="google")
    budget = Column(Float, nullable=True)
    status = Column(String(32), nullable=False, default="pending")
    google_ads_campaign_id = Column(String(128), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
