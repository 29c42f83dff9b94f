from dataclasses import dataclass, field
from typing import Callable, Dict, List
from datetime import datetime, date, timezone
import logging

from fastapi import HTTPException

from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto
from ..ports.profile_repo import ProfileRepository
from ..ports.reminders_repo import ReminderDraft
from ..ports.user_repo import UserRepository
from .guards import require_doctor, require_patient
from ...domain.roles import SessionContext, PatientRole, DoctorRole
from ...domain.scheduling import (
    AvailabilityWindow,
    BookedSlot,
    BookingRejected,
    REJECTION_MESSAGES,
    RejectionReason,
    find_too_close,
    parse_date,
    parse_time,
    reminder_due_at,
    validate_booking,
)

logger = logging.getLogger(__name__)

REMINDER_SUBJECT = "Appointment Reminder"


def to_booked_slots(appointments: List[AppointmentDto]) -> List[BookedSlot]:
    return [
        BookedSlot(
            appointment_date=a.appointment_date,
            appointment_time=parse_time(a.appointment_time),
            accepted=a.acceptance,
            appointment_id=a.id,
        )
        for a in appointments
    ]


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository
    profile_repo: ProfileRepository
    user_repo: UserRepository
    now: Callable[[], datetime] = field(default=datetime.now)

    def _today(self) -> date:
        return self.now().date()

    def book(self, ctx: SessionContext, doctor_id: int, appointment_date_str: str, appointment_time_str: str, symptoms: str = "") -> AppointmentDto:
        patient = require_patient(ctx)
        try:
            appointment_date = parse_date(appointment_date_str)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid appointment date format. Use YYYY-MM-DD")
        try:
            appointment_time = parse_time(appointment_time_str)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid appointment time format. Use HH:MM")

        doctor = self.profile_repo.get_doctor(doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")

        window = AvailabilityWindow(
            available_from=parse_time(doctor.available_time_from),
            available_to=parse_time(doctor.available_time_to),
        )
        existing = to_booked_slots(self.repo.list_accepted_on_date(doctor_id, appointment_date))
        validate_booking(appointment_date, appointment_time, window, existing, today=self._today())

        appt = self.repo.create(
            patient.patient_id,
            doctor_id,
            appointment_date,
            appointment_time.strftime("%H:%M"),
            symptoms.strip() or "N/A",
        )
        logger.info(f"Appointment {appt.id} requested by patient {patient.patient_id} with doctor {doctor_id}")
        return appt

    def _own_appointment(self, doctor: DoctorRole, appointment_id: int) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        if not appt or appt.doctor_id != doctor.doctor_id:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appt

    def accept(self, ctx: SessionContext, appointment_id: int) -> AppointmentDto:
        doctor = require_doctor(ctx)
        appt = self._own_appointment(doctor, appointment_id)
        if appt.acceptance:
            raise HTTPException(status_code=409, detail="Appointment is already accepted")

        # Another request may have been accepted since this one was booked
        others = to_booked_slots(self.repo.list_accepted_on_date(doctor.doctor_id, appt.appointment_date))
        clash = find_too_close(appt.appointment_date, parse_time(appt.appointment_time), others, exclude_id=appt.id)
        if clash is not None:
            raise BookingRejected(RejectionReason.TOO_CLOSE, REJECTION_MESSAGES[RejectionReason.TOO_CLOSE])

        reminders = self._reminder_drafts(appt)
        if not self.repo.accept(appointment_id, reminders):
            raise HTTPException(status_code=409, detail="Appointment is already accepted")
        appt.acceptance = True
        logger.info(f"Appointment {appointment_id} accepted by doctor {doctor.doctor_id}, reminders due {reminders[0].due_at.isoformat()}")
        return appt

    def _reminder_drafts(self, appt: AppointmentDto) -> List[ReminderDraft]:
        """Reminder emails for both participants. Appointment times are local; due_at is stored in UTC."""
        patient = self.profile_repo.get_patient(appt.patient_id)
        doctor = self.profile_repo.get_doctor(appt.doctor_id)
        if not patient or not doctor:
            raise HTTPException(status_code=404, detail="Appointment participants not found")
        patient_user = self.user_repo.get_by_id(patient.user_id)
        doctor_user = self.user_repo.get_by_id(doctor.user_id)
        if not patient_user or not doctor_user:
            raise HTTPException(status_code=404, detail="Appointment participants not found")

        appointment_at = datetime.combine(appt.appointment_date, parse_time(appt.appointment_time))
        due_at = reminder_due_at(appointment_at, self.now()).astimezone(timezone.utc)
        when = f"{appt.appointment_date.isoformat()} at {appt.appointment_time}"

        return [
            ReminderDraft(
                recipient=patient_user.email,
                subject=REMINDER_SUBJECT,
                body=f"Dear {patient.username}, this is a reminder for your appointment with Dr. {doctor.username} on {when}.",
                due_at=due_at,
            ),
            ReminderDraft(
                recipient=doctor_user.email,
                subject=REMINDER_SUBJECT,
                body=f"Dear Dr. {doctor.username}, this is a reminder for your appointment with {patient.username} on {when}.",
                due_at=due_at,
            ),
        ]

    def cancel(self, ctx: SessionContext, appointment_id: int) -> None:
        doctor = require_doctor(ctx)
        appt = self._own_appointment(doctor, appointment_id)
        if appt.acceptance:
            raise HTTPException(status_code=409, detail="Accepted appointments cannot be cancelled")
        self.repo.delete(appointment_id)
        logger.info(f"Appointment {appointment_id} cancelled by doctor {doctor.doctor_id}")

    def list_unaccepted(self, ctx: SessionContext) -> List[AppointmentDto]:
        doctor = require_doctor(ctx)
        return self.repo.list_unaccepted_for_doctor(doctor.doctor_id)

    def list_for(self, ctx: SessionContext) -> Dict[str, List[AppointmentDto]]:
        """Accepted appointments split into upcoming (ascending) and past (descending)."""
        if isinstance(ctx.role, PatientRole):
            appts = self.repo.list_accepted_for_patient(ctx.role.patient_id)
        elif isinstance(ctx.role, DoctorRole):
            appts = self.repo.list_accepted_for_doctor(ctx.role.doctor_id)
        else:
            raise HTTPException(status_code=403, detail="Only patients and doctors have appointments")

        today = self._today()
        upcoming = sorted(
            (a for a in appts if a.appointment_date > today),
            key=lambda a: (a.appointment_date, a.appointment_time),
        )
        past = sorted(
            (a for a in appts if a.appointment_date <= today),
            key=lambda a: (a.appointment_date, a.appointment_time),
            reverse=True,
        )
        return {"upcoming": upcoming, "past": past}

    def get(self, ctx: SessionContext, appointment_id: int) -> AppointmentDto:
        appt = self.repo.get_by_id(appointment_id)
        allowed = appt is not None and (
            (isinstance(ctx.role, PatientRole) and appt.patient_id == ctx.role.patient_id)
            or (isinstance(ctx.role, DoctorRole) and appt.doctor_id == ctx.role.doctor_id)
        )
        if not allowed:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appt

    def taken_times(self, doctor_id: int, appointment_date_str: str) -> List[str]:
        if not self.profile_repo.get_doctor(doctor_id):
            raise HTTPException(status_code=404, detail="Doctor not found")
        try:
            appointment_date = parse_date(appointment_date_str)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
        return sorted(a.appointment_time for a in self.repo.list_accepted_on_date(doctor_id, appointment_date))
