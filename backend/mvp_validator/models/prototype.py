from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Prototype(Base):
    __tablename__ = "prototypes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, unique=True)
    hero_copy = Column(Text, nullable=True)
    features_json = Column(Text, nullable=True)  # JSON list of strings
    pricing_structure = Column(Text, nullable=True)
    wireframe_data = Column(Text, nullable=True)  # JSON object: {"valuePropositions": [...]}

    generation_source = Column(String(16), nullable=False, default="ai")  # ai | template
    fallback_reason = Column(String(64), nullable=True)

    generated_at = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="prototype")
