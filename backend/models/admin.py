"""Admin model definitions."""

from sqlalchemy import Column, Integer, String
from backend.database import Base


class Admin(Base):
    """Represents an admin account allowed into the dashboard."""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
