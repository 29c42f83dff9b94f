# medportal/db/models/health/lab_report.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import datetime

from ....core.clock import utc_now

class LabReport(SQLModel, table=True):
    __tablename__ = "labreports"
    id: Optional[int] = Field(default=None, primary_key=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    lab_user_id: int = Field(foreign_key="lab_users.id", index=True)
    title: str = Field(max_length=200)
    report_url: str = Field(max_length=500)
    send_time: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
