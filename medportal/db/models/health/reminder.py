# medportal/db/models/health/reminder.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import datetime

from ....core.clock import utc_now

class ScheduledReminder(SQLModel, table=True):
    __tablename__ = "scheduled_reminders"
    id: Optional[int] = Field(default=None, primary_key=True)
    appointment_id: int = Field(foreign_key="appointments.id", index=True)
    recipient: str = Field(max_length=255)
    subject: str = Field(max_length=200)
    body: str
    due_at: datetime = Field(index=True, sa_type=DateTime(timezone=True))
    status: str = Field(default="pending", max_length=20, index=True)
    attempts: int = Field(default=0)
    last_error: Optional[str] = None
    sent_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
