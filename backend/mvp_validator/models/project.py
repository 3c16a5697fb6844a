from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)

    # User-provided inputs
    idea_description = Column(Text, nullable=False)
    target_audience = Column(String(255), nullable=True)
    price_point = Column(Float, nullable=True)
    business_model = Column(String(32), nullable=True)  # saas | service | product | course

    # draft | prototype_generated | landing_page_created | campaign_launched | completed
    status = Column(String(32), nullable=False, default="draft")

    # Set only after the hosting API has created the repository
    github_repo_url = Column(String(1024), nullable=True)
    github_repo_name = Column(String(512), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

    owner = relationship("User", back_populates="projects")
    prototype = relationship("Prototype", back_populates="project", uselist=False)
    landing_page = relationship("LandingPage", uselist=False)
    campaign = relationship("Campaign", uselist=False)
    analytics = relationship("Analytics", uselist=False)
