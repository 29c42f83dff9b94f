"""Reminder worker.

APScheduler-based interval job that delivers due appointment reminders
from the ``scheduled_reminders`` table.
"""

import logging
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.engine import Engine
from sqlmodel import Session

from ...application.ports.mailer import Mailer
from ...application.services.reminder_service import DispatchResult, ReminderService
from ..notifications.smtp_mailer import build_mailer
from ..persistence.sqlalchemy.repositories.reminders_repository_sql import SqlRemindersRepository

logger = logging.getLogger(__name__)

JOB_ID = "dispatch_due_reminders"


class ReminderWorker:
    """Polls for due reminders every ``poll_seconds``.

    Reminders live in the database, so a restart only delays delivery
    until the next poll.
    """

    def __init__(
        self,
        engine: Engine,
        poll_seconds: int = 30,
        mailer: Optional[Mailer] = None,
        enabled: bool = True,
        session_factory: Optional[Callable[[], Session]] = None,
    ):
        self.engine = engine
        self.poll_seconds = poll_seconds
        self.mailer = mailer
        self.enabled = enabled
        self._session_factory = session_factory or (lambda: Session(self.engine))

        self._scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def run_once(self) -> DispatchResult:
        """Process one batch of due reminders in a fresh session."""
        if self.mailer is None:
            self.mailer = build_mailer()
        with self._session_factory() as session:
            service = ReminderService(repo=SqlRemindersRepository(session), mailer=self.mailer)
            return service.dispatch_due()

    def _job(self) -> None:
        try:
            self.run_once()
        except Exception as e:
            logger.error(f"Error dispatching reminders: {e}", exc_info=True)

    async def start(self) -> None:
        if not self.enabled:
            logger.info("ReminderWorker is disabled, skipping start")
            return

        if self._is_running:
            logger.warning("ReminderWorker already running")
            return

        scheduler = AsyncIOScheduler()
        self._scheduler = scheduler
        scheduler.add_job(
            self._job,
            IntervalTrigger(seconds=self.poll_seconds),
            id=JOB_ID,
            replace_existing=True,
            name="Dispatch due appointment reminders",
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._is_running = True
        logger.info(f"ReminderWorker started (poll every {self.poll_seconds}s)")

    async def stop(self) -> None:
        if self._scheduler and self._is_running:
            self._scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("ReminderWorker stopped")
