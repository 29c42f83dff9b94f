from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime


@dataclass
class ReminderDraft:
    recipient: str
    subject: str
    body: str
    due_at: datetime


@dataclass
class ReminderDto:
    id: int
    appointment_id: int
    recipient: str
    subject: str
    body: str
    due_at: datetime
    status: str
    attempts: int = 0
    last_error: Optional[str] = None
    sent_at: Optional[datetime] = None


class RemindersRepository:
    def list_due(self, now: datetime, limit: int = 100) -> List[ReminderDto]:
        ...

    def claim(self, reminder_id: int) -> bool:
        """Move a reminder from pending to sending; False if another dispatcher got it first."""
        ...

    def mark_sent(self, reminder_id: int, sent_at: datetime) -> None:
        ...

    def mark_failed(self, reminder_id: int, error: str) -> None:
        ...
