from typing import List, Optional
from datetime import date
from sqlalchemy import update
from sqlmodel import Session, select

from .....db.models import Appointment, Doctor, Patient, ScheduledReminder
from .....application.ports.reminders_repo import ReminderDraft
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
)


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _appt_to_dto(self, a: Appointment) -> AppointmentDto:
        patient = self.session.get(Patient, a.patient_id)
        doctor = self.session.get(Doctor, a.doctor_id)
        return AppointmentDto(
            id=a.id,
            patient_id=a.patient_id,
            doctor_id=a.doctor_id,
            appointment_date=a.appointment_date,
            appointment_time=a.appointment_time,
            symptoms=a.symptoms,
            acceptance=a.acceptance,
            created_at=a.created_at,
            patient_name=patient.username if patient else None,
            doctor_name=doctor.username if doctor else None,
        )

    def list_accepted_on_date(self, doctor_id: int, appointment_date: date) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.appointment_date == appointment_date)
            .where(Appointment.acceptance == True)  # noqa: E712
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def create(self, patient_id: int, doctor_id: int, appointment_date: date, appointment_time: str, symptoms: str) -> AppointmentDto:
        appt = Appointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            symptoms=symptoms,
            acceptance=False,
        )
        self.session.add(appt)
        self.session.commit()
        self.session.refresh(appt)
        return self._appt_to_dto(appt)

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        a = self.session.get(Appointment, appointment_id)
        return self._appt_to_dto(a) if a else None

    def accept(self, appointment_id: int, reminders: List[ReminderDraft]) -> bool:
        try:
            result = self.session.connection().execute(
                update(Appointment)
                .where(Appointment.id == appointment_id)
                .where(Appointment.acceptance == False)  # noqa: E712
                .values(acceptance=True)
            )
            if result.rowcount != 1:
                self.session.rollback()
                return False
            for r in reminders:
                self.session.add(ScheduledReminder(
                    appointment_id=appointment_id,
                    recipient=r.recipient,
                    subject=r.subject,
                    body=r.body,
                    due_at=r.due_at,
                ))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

    def delete(self, appointment_id: int) -> None:
        a = self.session.get(Appointment, appointment_id)
        if not a:
            return
        self.session.delete(a)
        self.session.commit()

    def list_unaccepted_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.acceptance == False)  # noqa: E712
            .order_by(Appointment.appointment_date.asc(), Appointment.appointment_time.asc())
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def list_accepted_for_patient(self, patient_id: int) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.patient_id == patient_id)
            .where(Appointment.acceptance == True)  # noqa: E712
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def list_accepted_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.acceptance == True)  # noqa: E712
        ).all()
        return [self._appt_to_dto(r) for r in rows]
