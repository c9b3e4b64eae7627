"""Appointment model definitions."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Time, func
from backend.database import Base


class Appointment(Base):
    """Represents a booking request submitted from the public form."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    category = Column(String(100), nullable=False, server_default="General")
    service = Column(String(100), nullable=False)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(Time, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())
