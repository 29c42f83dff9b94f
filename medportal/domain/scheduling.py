"""Appointment scheduling rules.

Booking validation against a doctor's availability window and the
doctor's already-accepted appointments, plus the reminder delay used when
an appointment is accepted.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, Optional, Union

MIN_SPACING = timedelta(minutes=30)
REMINDER_LEAD = timedelta(hours=12)
IMMEDIATE_REMINDER_DELAY_MS = 5000

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"


class RejectionReason(str, Enum):
    PAST_DATE = "PastDate"
    OUTSIDE_AVAILABILITY = "OutsideAvailability"
    TOO_CLOSE = "TooClose"


REJECTION_MESSAGES = {
    RejectionReason.PAST_DATE: "Appointment date cannot be in the past.",
    RejectionReason.OUTSIDE_AVAILABILITY: "Please select a time between {available_from} and {available_to}.",
    RejectionReason.TOO_CLOSE: "This time slot is too close to another appointment. Please select a different time.",
}


class BookingRejected(Exception):
    def __init__(self, reason: RejectionReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


@dataclass(frozen=True)
class AvailabilityWindow:
    available_from: time
    available_to: time

    def contains(self, t: time) -> bool:
        return self.available_from <= t <= self.available_to

    def label(self) -> tuple:
        return self.available_from.strftime(TIME_FORMAT), self.available_to.strftime(TIME_FORMAT)


@dataclass(frozen=True)
class BookedSlot:
    appointment_date: date
    appointment_time: time
    accepted: bool = True
    appointment_id: Optional[int] = None

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.appointment_date, self.appointment_time)


def parse_time(value: Union[str, time]) -> time:
    """Accept ``HH:MM`` or ``HH:MM:SS`` strings, or a ``time``."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    for fmt in (TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time().replace(second=0)
        except ValueError:
            continue
    raise ValueError(f"Invalid time '{value}'. Use HH:MM")


def parse_date(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


def minutes_apart(a: datetime, b: datetime) -> float:
    return abs((a - b).total_seconds()) / 60


def check_booking(
    appointment_date: date,
    appointment_time: time,
    availability: AvailabilityWindow,
    existing: Iterable[BookedSlot],
    today: Optional[date] = None,
) -> Optional[RejectionReason]:
    """Return the first rule the proposed slot breaks, or None when it is bookable.

    Rules are checked in order: past date, availability window, then the
    30 minute spacing against accepted appointments on the same date.
    """
    today = today or date.today()
    if appointment_date < today:
        return RejectionReason.PAST_DATE

    if not availability.contains(appointment_time):
        return RejectionReason.OUTSIDE_AVAILABILITY

    if find_too_close(appointment_date, appointment_time, existing) is not None:
        return RejectionReason.TOO_CLOSE

    return None


def find_too_close(
    appointment_date: date,
    appointment_time: time,
    existing: Iterable[BookedSlot],
    exclude_id: Optional[int] = None,
) -> Optional[BookedSlot]:
    proposed = datetime.combine(appointment_date, appointment_time)
    for slot in existing:
        if not slot.accepted or slot.appointment_date != appointment_date:
            continue
        if exclude_id is not None and slot.appointment_id == exclude_id:
            continue
        if minutes_apart(slot.starts_at, proposed) < MIN_SPACING.total_seconds() / 60:
            return slot
    return None


def validate_booking(
    appointment_date: date,
    appointment_time: time,
    availability: AvailabilityWindow,
    existing: Iterable[BookedSlot],
    today: Optional[date] = None,
) -> None:
    reason = check_booking(appointment_date, appointment_time, availability, existing, today=today)
    if reason is None:
        return
    message = REJECTION_MESSAGES[reason]
    if reason is RejectionReason.OUTSIDE_AVAILABILITY:
        available_from, available_to = availability.label()
        message = message.format(available_from=available_from, available_to=available_to)
    raise BookingRejected(reason, message)


def schedule_reminder(appointment_at: datetime, now: datetime) -> int:
    """Milliseconds to wait before sending the reminder.

    12 hours before the appointment when that is still ahead, otherwise 5 seconds.
    """
    lead_delay = (appointment_at - REMINDER_LEAD) - now
    if lead_delay > timedelta(0):
        return int(lead_delay.total_seconds() * 1000)
    return IMMEDIATE_REMINDER_DELAY_MS


def reminder_due_at(appointment_at: datetime, now: datetime) -> datetime:
    return now + timedelta(milliseconds=schedule_reminder(appointment_at, now))
