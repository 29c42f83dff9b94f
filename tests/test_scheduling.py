from datetime import date, datetime, time, timedelta

import pytest

from medportal.domain.scheduling import (
    AvailabilityWindow,
    BookedSlot,
    BookingRejected,
    RejectionReason,
    check_booking,
    find_too_close,
    parse_time,
    reminder_due_at,
    schedule_reminder,
    validate_booking,
)

TODAY = date(2025, 3, 1)
WINDOW = AvailabilityWindow(time(9, 0), time(17, 0))


def accepted_at(hh: int, mm: int, d: date = TODAY, appointment_id: int = 1) -> BookedSlot:
    return BookedSlot(appointment_date=d, appointment_time=time(hh, mm), accepted=True, appointment_id=appointment_id)


def test_too_close_to_accepted_appointment():
    existing = [accepted_at(10, 0)]
    assert check_booking(TODAY, time(10, 25), WINDOW, existing, today=TODAY) is RejectionReason.TOO_CLOSE


def test_far_enough_from_accepted_appointment():
    existing = [accepted_at(10, 0)]
    assert check_booking(TODAY, time(10, 35), WINDOW, existing, today=TODAY) is None


def test_exactly_thirty_minutes_is_allowed():
    existing = [accepted_at(10, 0)]
    assert check_booking(TODAY, time(10, 30), WINDOW, existing, today=TODAY) is None
    assert check_booking(TODAY, time(9, 30), WINDOW, existing, today=TODAY) is None


def test_twenty_nine_minutes_before_is_rejected():
    existing = [accepted_at(10, 0)]
    assert check_booking(TODAY, time(9, 31), WINDOW, existing, today=TODAY) is RejectionReason.TOO_CLOSE


def test_past_date_rejected():
    assert check_booking(date(2025, 2, 28), time(10, 0), WINDOW, [], today=TODAY) is RejectionReason.PAST_DATE


def test_today_is_not_past():
    assert check_booking(TODAY, time(10, 0), WINDOW, [], today=TODAY) is None


def test_window_bounds_are_inclusive():
    assert check_booking(TODAY, time(9, 0), WINDOW, [], today=TODAY) is None
    assert check_booking(TODAY, time(17, 0), WINDOW, [], today=TODAY) is None
    assert check_booking(TODAY, time(8, 59), WINDOW, [], today=TODAY) is RejectionReason.OUTSIDE_AVAILABILITY
    assert check_booking(TODAY, time(17, 1), WINDOW, [], today=TODAY) is RejectionReason.OUTSIDE_AVAILABILITY


def test_past_date_checked_before_window():
    assert check_booking(date(2025, 2, 1), time(3, 0), WINDOW, [], today=TODAY) is RejectionReason.PAST_DATE


def test_unaccepted_and_other_day_slots_are_ignored():
    existing = [
        BookedSlot(TODAY, time(10, 0), accepted=False, appointment_id=1),
        accepted_at(10, 0, d=date(2025, 3, 2), appointment_id=2),
    ]
    assert check_booking(TODAY, time(10, 10), WINDOW, existing, today=TODAY) is None


def test_find_too_close_can_exclude_the_appointment_itself():
    existing = [accepted_at(10, 0, appointment_id=7)]
    assert find_too_close(TODAY, time(10, 0), existing, exclude_id=7) is None
    assert find_too_close(TODAY, time(10, 0), existing) == existing[0]


def test_validate_booking_formats_window_message():
    with pytest.raises(BookingRejected) as exc:
        validate_booking(TODAY, time(18, 0), WINDOW, [], today=TODAY)
    assert exc.value.reason is RejectionReason.OUTSIDE_AVAILABILITY
    assert exc.value.message == "Please select a time between 09:00 and 17:00."


def test_validate_booking_passes_silently():
    assert validate_booking(TODAY, time(11, 0), WINDOW, [accepted_at(10, 0)], today=TODAY) is None


def test_parse_time_formats():
    assert parse_time("09:05") == time(9, 5)
    assert parse_time("09:05:59") == time(9, 5)
    with pytest.raises(ValueError):
        parse_time("9am")


def test_reminder_twelve_hours_before():
    now = datetime(2025, 3, 1, 9, 0)
    appointment_at = datetime(2025, 3, 5, 9, 0)
    expected = datetime(2025, 3, 4, 21, 0) - now
    assert schedule_reminder(appointment_at, now) == int(expected.total_seconds() * 1000)
    assert reminder_due_at(appointment_at, now) == datetime(2025, 3, 4, 21, 0)


def test_reminder_within_twelve_hours_is_immediate():
    now = datetime(2025, 3, 1, 9, 0)
    assert schedule_reminder(now + timedelta(hours=3), now) == 5000
    assert schedule_reminder(now + timedelta(hours=12), now) == 5000
    assert reminder_due_at(now + timedelta(hours=3), now) == now + timedelta(seconds=5)
