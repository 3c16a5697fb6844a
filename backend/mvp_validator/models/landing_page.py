from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from ..database import Base


class LandingPage(Base):
    """Declared for the landing-page stage; no handler writes it yet."""

    __tablename__ = "landing_pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    url = Column(String(1024), nullable=True)
    template_id = Column(String(128), nullable=True)
    content_json = Column(Text, nullable=True)
    deployed_at = Column(DateTime, nullable=True)
    analytics_id = Column(String(128), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
