from typing import List
from datetime import datetime
from sqlalchemy import update
from sqlmodel import Session, select

from .....db.models import ScheduledReminder
from .....application.ports.reminders_repo import RemindersRepository, ReminderDto


class SqlRemindersRepository(RemindersRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, r: ScheduledReminder) -> ReminderDto:
        return ReminderDto(
            id=r.id,
            appointment_id=r.appointment_id,
            recipient=r.recipient,
            subject=r.subject,
            body=r.body,
            due_at=r.due_at,
            status=r.status,
            attempts=r.attempts,
            last_error=r.last_error,
            sent_at=r.sent_at,
        )

    def list_due(self, now: datetime, limit: int = 100) -> List[ReminderDto]:
        rows = self.session.exec(
            select(ScheduledReminder)
            .where(ScheduledReminder.status == "pending")
            .where(ScheduledReminder.due_at <= now)
            .order_by(ScheduledReminder.due_at.asc())
            .limit(limit)
        ).all()
        return [self._to_dto(r) for r in rows]

    def claim(self, reminder_id: int) -> bool:
        # Conditional update so concurrent dispatchers never both send one row
        result = self.session.connection().execute(
            update(ScheduledReminder)
            .where(ScheduledReminder.id == reminder_id)
            .where(ScheduledReminder.status == "pending")
            .values(status="sending")
        )
        claimed = result.rowcount == 1
        self.session.commit()
        return claimed

    def mark_sent(self, reminder_id: int, sent_at: datetime) -> None:
        r = self.session.get(ScheduledReminder, reminder_id)
        if not r:
            return
        r.status = "sent"
        r.attempts += 1
        r.sent_at = sent_at
        self.session.add(r)
        self.session.commit()

    def mark_failed(self, reminder_id: int, error: str) -> None:
        r = self.session.get(ScheduledReminder, reminder_id)
        if not r:
            return
        r.status = "failed"
        r.attempts += 1
        r.last_error = error[:1000]
        self.session.add(r)
        self.session.commit()
