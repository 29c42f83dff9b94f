from datetime import date, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, Session, create_engine, select

from medportal.application.ports.reminders_repo import ReminderDraft
from medportal.core.clock import utc_now
from medportal.db.models import Appointment, ScheduledReminder
from medportal.infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from medportal.infrastructure.persistence.sqlalchemy.repositories.reminders_repository_sql import SqlRemindersRepository


@pytest.fixture
def file_engine(tmp_path):
    # A file database so each session gets its own connection
    engine = create_engine(f"sqlite:///{tmp_path / 'medportal.db'}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def appointment_id(file_engine):
    with Session(file_engine) as session:
        appt = Appointment(patient_id=1, doctor_id=1, appointment_date=date(2025, 3, 5), appointment_time="10:00")
        session.add(appt)
        session.commit()
        return appt.id


def draft(recipient="pat@example.com"):
    return ReminderDraft(recipient=recipient, subject="Appointment Reminder", body="b", due_at=utc_now())


def test_accept_stores_reminders_with_the_flag(file_engine, appointment_id):
    with Session(file_engine) as session:
        assert SqlAppointmentsRepository(session).accept(appointment_id, [draft(), draft("doc@example.com")]) is True

    with Session(file_engine) as session:
        assert session.get(Appointment, appointment_id).acceptance is True
        reminders = session.exec(select(ScheduledReminder)).all()
    assert sorted(r.recipient for r in reminders) == ["doc@example.com", "pat@example.com"]
    assert all(r.appointment_id == appointment_id for r in reminders)


def test_accept_twice_returns_false(file_engine, appointment_id):
    with Session(file_engine) as session:
        repo = SqlAppointmentsRepository(session)
        assert repo.accept(appointment_id, [draft()]) is True
        assert repo.accept(appointment_id, [draft()]) is False

    with Session(file_engine) as session:
        assert len(session.exec(select(ScheduledReminder)).all()) == 1


def test_failed_reminder_insert_rolls_back_acceptance(file_engine, appointment_id):
    with Session(file_engine) as session:
        with pytest.raises(IntegrityError):
            SqlAppointmentsRepository(session).accept(appointment_id, [draft(), draft(recipient=None)])

    with Session(file_engine) as session:
        assert session.get(Appointment, appointment_id).acceptance is False
        assert session.exec(select(ScheduledReminder)).all() == []


def test_only_one_dispatcher_claims_a_reminder(file_engine):
    with Session(file_engine) as session:
        session.add(ScheduledReminder(appointment_id=1, recipient="pat@example.com", subject="s", body="b", due_at=utc_now() - timedelta(minutes=1)))
        session.commit()

    with Session(file_engine) as first_session, Session(file_engine) as second_session:
        first, second = SqlRemindersRepository(first_session), SqlRemindersRepository(second_session)
        first_due = first.list_due(utc_now())
        second_due = second.list_due(utc_now())
        assert [r.id for r in first_due] == [r.id for r in second_due] == [1]

        assert first.claim(1) is True
        assert second.claim(1) is False

    with Session(file_engine) as session:
        assert session.get(ScheduledReminder, 1).status == "sending"
        assert SqlRemindersRepository(session).list_due(utc_now()) == []


def test_timestamps_default_to_aware_utc(file_engine, appointment_id):
    with Session(file_engine) as session:
        reminder = ScheduledReminder(appointment_id=appointment_id, recipient="pat@example.com", subject="s", body="b", due_at=utc_now())
        session.add(reminder)
        session.commit()
        assert reminder.id is not None
    assert utc_now().utcoffset() == timedelta(0)
    assert ScheduledReminder(appointment_id=1, recipient="r", subject="s", body="b", due_at=utc_now()).created_at.tzinfo is not None
