from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime, date

from .reminders_repo import ReminderDraft


@dataclass
class AppointmentDto:
    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: str
    symptoms: str
    acceptance: bool
    created_at: datetime
    patient_name: Optional[str] = None
    doctor_name: Optional[str] = None


class AppointmentsRepository:
    def list_accepted_on_date(self, doctor_id: int, appointment_date: date) -> List[AppointmentDto]:
        ...

    def create(self, patient_id: int, doctor_id: int, appointment_date: date, appointment_time: str, symptoms: str) -> AppointmentDto:
        ...

    def get_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        ...

    def accept(self, appointment_id: int, reminders: List[ReminderDraft]) -> bool:
        """Flip acceptance and store the reminders in one transaction.

        Returns False when the appointment was already accepted.
        """
        ...

    def delete(self, appointment_id: int) -> None:
        ...

    def list_unaccepted_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        ...

    def list_accepted_for_patient(self, patient_id: int) -> List[AppointmentDto]:
        ...

    def list_accepted_for_doctor(self, doctor_id: int) -> List[AppointmentDto]:
        ...
