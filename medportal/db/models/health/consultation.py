# medportal/db/models/health/consultation.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import datetime

from ....core.clock import utc_now

class Consultation(SQLModel, table=True):
    __tablename__ = "consultations"
    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    disease: str
    prescription: str = Field(default="")
    access_allowed: bool = Field(default=False)
    consulted_time: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
