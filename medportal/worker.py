"""Standalone reminder worker: ``python -m medportal.worker``."""
import asyncio
import logging

from .core.config import settings
from .database import create_db_and_tables, engine
from .infrastructure.scheduler.reminder_worker import ReminderWorker

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


async def main() -> None:
    create_db_and_tables()
    worker = ReminderWorker(engine, poll_seconds=settings.REMINDER_POLL_SECONDS)
    await worker.start()
    try:
        await asyncio.Event().wait()
    finally:
        await worker.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Reminder worker interrupted")
