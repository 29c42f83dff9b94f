from dataclasses import dataclass, field
from typing import Callable, Optional
from datetime import datetime
import logging

from ..ports.mailer import Mailer
from ..ports.reminders_repo import RemindersRepository
from ...core.clock import utc_now

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    sent: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class ReminderService:
    repo: RemindersRepository
    mailer: Mailer
    now: Callable[[], datetime] = field(default=utc_now)
    batch_size: int = 100

    def dispatch_due(self, now: Optional[datetime] = None) -> DispatchResult:
        """Send every pending reminder whose due time has passed.

        Each reminder is claimed before sending, so a reminder another
        dispatcher already picked up is skipped. A failed send marks only
        that reminder as failed; it is not retried.
        """
        now = now or self.now()
        result = DispatchResult()
        for reminder in self.repo.list_due(now, limit=self.batch_size):
            if not self.repo.claim(reminder.id):
                result.skipped += 1
                continue
            try:
                self.mailer.send_email(reminder.recipient, reminder.subject, reminder.body)
            except Exception as e:
                logger.error(f"Error sending reminder {reminder.id} to {reminder.recipient}: {e}")
                self.repo.mark_failed(reminder.id, str(e))
                result.failed += 1
                continue
            self.repo.mark_sent(reminder.id, now)
            result.sent += 1

        if result.sent or result.failed:
            logger.info(f"dispatch_due: {result.sent} reminders sent, {result.failed} failed")
        return result
