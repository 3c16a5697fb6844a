from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class User(Base):
    """Local mirror of an identity-service user, plus the GitHub link."""

    __tablename__ = "users"
    __table_args__ = (
        # Connected means both fields are present; never one without the other.
        CheckConstraint(
            "(github_username IS NULL AND github_access_token IS NULL) OR "
            "(github_username IS NOT NULL AND github_access_token IS NOT NULL)",
            name="ck_users_github_fields_paired",
        ),
    )

    id = Column(String(255), primary_key=True)  # identity-service user id
    email = Column(String(320), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    github_username = Column(String(255), nullable=True)
    github_access_token = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    projects = relationship("Project", back_populates="owner", lazy="selectin")

    @property
    def github_connected(self) -> bool:
        return bool(self.github_username and self.github_access_token)
