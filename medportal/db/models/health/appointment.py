# medportal/db/models/health/appointment.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import date, datetime

from ....core.clock import utc_now

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    appointment_date: date = Field(index=True)
    appointment_time: str = Field(max_length=5)  # HH:MM
    symptoms: str = Field(default="N/A")
    acceptance: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
