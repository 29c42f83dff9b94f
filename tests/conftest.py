import os
import tempfile
from datetime import datetime, date
from typing import Any, Dict, List, Optional

import pytest

# Settings are read at import time, so configure them before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("REMINDER_WORKER_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="medportal-uploads-"))

from medportal.application.ports.appointments_repo import AppointmentDto
from medportal.application.ports.consultations_repo import ConsultationDto
from medportal.application.ports.lab_reports_repo import LabReportDto
from medportal.application.ports.profile_repo import PatientDto, DoctorDto, LabUserDto
from medportal.application.ports.reminders_repo import ReminderDraft, ReminderDto
from medportal.application.ports.user_repo import UserDto
from medportal.domain.roles import (
    DOCTOR,
    LAB_USER,
    PATIENT,
    DoctorRole,
    Identity,
    LabUserRole,
    PatientRole,
    SessionContext,
)


class FakeUserRepo:
    def __init__(self):
        self.users: Dict[str, UserDto] = {}

    def add(self, user_id: str, email: str, role: str, password_hash: str = "hash") -> UserDto:
        u = UserDto(user_id, email, password_hash, role, None, datetime(2025, 1, 1))
        self.users[user_id] = u
        return u

    def get_by_email(self, email: str) -> Optional[UserDto]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        return self.users.get(user_id)

    def create(self, email: str, password_hash: str, role: str) -> UserDto:
        return self.add(f"u{len(self.users) + 1}", email, role, password_hash)

    def update_email(self, user_id: str, email: str) -> None:
        self.users[user_id].email = email

    def set_profile_picture(self, user_id: str, url: Optional[str]) -> None:
        self.users[user_id].profile = url


class FakeProfileRepo:
    def __init__(self):
        self.patients: Dict[int, PatientDto] = {}
        self.doctors: Dict[int, DoctorDto] = {}
        self.lab_users: Dict[int, LabUserDto] = {}

    def _tables(self, role: str):
        return {PATIENT: (self.patients, PatientDto), DOCTOR: (self.doctors, DoctorDto), LAB_USER: (self.lab_users, LabUserDto)}[role]

    def get_patient_by_user(self, user_id: str):
        return next((p for p in self.patients.values() if p.user_id == user_id), None)

    def get_doctor_by_user(self, user_id: str):
        return next((d for d in self.doctors.values() if d.user_id == user_id), None)

    def get_lab_user_by_user(self, user_id: str):
        return next((lab for lab in self.lab_users.values() if lab.user_id == user_id), None)

    def get_patient(self, patient_id: int):
        return self.patients.get(patient_id)

    def get_doctor(self, doctor_id: int):
        return self.doctors.get(doctor_id)

    def get_lab_user(self, lab_user_id: int):
        return self.lab_users.get(lab_user_id)

    def list_doctors(self, search: Optional[str] = None) -> List[DoctorDto]:
        return [d for d in self.doctors.values() if not search or search.lower() in d.username.lower()]

    def list_patients(self, search: Optional[str] = None) -> List[PatientDto]:
        return [p for p in self.patients.values() if not search or search.lower() in p.username.lower()]

    def create_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        table, dto = self._tables(role)
        new_id = len(table) + 1
        table[new_id] = dto(id=new_id, user_id=user_id, **fields)

    def update_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        table, _ = self._tables(role)
        row = next(r for r in table.values() if r.user_id == user_id)
        for k, v in fields.items():
            setattr(row, k, v)


class FakeApptRepo:
    def __init__(self):
        self._id = 1
        self.appts: List[AppointmentDto] = []
        self.reminders: List[ReminderDraft] = []

    def add(self, patient_id: int, doctor_id: int, d: date, t: str, accepted: bool = False) -> AppointmentDto:
        a = AppointmentDto(self._id, patient_id, doctor_id, d, t, "N/A", accepted, datetime(2025, 1, 1))
        self.appts.append(a)
        self._id += 1
        return a

    def list_accepted_on_date(self, doctor_id: int, appointment_date: date):
        return [a for a in self.appts if a.doctor_id == doctor_id and a.appointment_date == appointment_date and a.acceptance]

    def create(self, patient_id, doctor_id, appointment_date, appointment_time, symptoms):
        a = self.add(patient_id, doctor_id, appointment_date, appointment_time)
        a.symptoms = symptoms
        return a

    def get_by_id(self, appointment_id: int):
        a = next((a for a in self.appts if a.id == appointment_id), None)
        # copy so services cannot mutate stored rows without calling the repo
        return AppointmentDto(**vars(a)) if a else None

    def accept(self, appointment_id: int, reminders: List[ReminderDraft]) -> bool:
        a = next(a for a in self.appts if a.id == appointment_id)
        if a.acceptance:
            return False
        a.acceptance = True
        self.reminders.extend(reminders)
        return True

    def delete(self, appointment_id: int) -> None:
        self.appts = [a for a in self.appts if a.id != appointment_id]

    def list_unaccepted_for_doctor(self, doctor_id: int):
        return [a for a in self.appts if a.doctor_id == doctor_id and not a.acceptance]

    def list_accepted_for_patient(self, patient_id: int):
        return [a for a in self.appts if a.patient_id == patient_id and a.acceptance]

    def list_accepted_for_doctor(self, doctor_id: int):
        return [a for a in self.appts if a.doctor_id == doctor_id and a.acceptance]


class FakeRemindersRepo:
    def __init__(self):
        self.reminders: List[ReminderDto] = []

    def add(self, appointment_id, recipient, subject, body, due_at):
        r = ReminderDto(len(self.reminders) + 1, appointment_id, recipient, subject, body, due_at, "pending")
        self.reminders.append(r)
        return r

    def list_due(self, now: datetime, limit: int = 100):
        return [r for r in self.reminders if r.status == "pending" and r.due_at <= now][:limit]

    def claim(self, reminder_id: int) -> bool:
        r = self.reminders[reminder_id - 1]
        if r.status != "pending":
            return False
        r.status = "sending"
        return True

    def mark_sent(self, reminder_id: int, sent_at: datetime) -> None:
        r = self.reminders[reminder_id - 1]
        r.status, r.sent_at, r.attempts = "sent", sent_at, r.attempts + 1

    def mark_failed(self, reminder_id: int, error: str) -> None:
        r = self.reminders[reminder_id - 1]
        r.status, r.last_error, r.attempts = "failed", error, r.attempts + 1


class FakeConsultationsRepo:
    def __init__(self):
        self.items: List[ConsultationDto] = []

    def create(self, patient_id, doctor_id, disease, access_allowed):
        c = ConsultationDto(len(self.items) + 1, patient_id, doctor_id, disease, "", access_allowed, datetime(2025, 1, 1))
        self.items.append(c)
        return c

    def get_by_id(self, consultation_id: int):
        return next((c for c in self.items if c.id == consultation_id), None)

    def list_for_patient(self, patient_id: int):
        return [c for c in self.items if c.patient_id == patient_id]

    def list_for_doctor(self, doctor_id: int):
        return [c for c in self.items if c.doctor_id == doctor_id]

    def update_prescription(self, consultation_id: int, prescription: str):
        c = self.get_by_id(consultation_id)
        c.prescription = prescription
        return c

    def delete(self, consultation_id: int) -> None:
        self.items = [c for c in self.items if c.id != consultation_id]


class FakeLabReportsRepo:
    def __init__(self):
        self.reports: List[LabReportDto] = []

    def create(self, patient_id, lab_user_id, title, report_url):
        r = LabReportDto(len(self.reports) + 1, patient_id, lab_user_id, title, report_url, datetime(2025, 1, 1))
        self.reports.append(r)
        return r

    def list_for_lab_user(self, lab_user_id: int):
        return [r for r in self.reports if r.lab_user_id == lab_user_id]

    def list_for_patient(self, patient_id: int):
        return [r for r in self.reports if r.patient_id == patient_id]


class FakeMediaStore:
    def __init__(self):
        self.saved = []

    def save_bytes(self, folder, data, filename, content_type):
        self.saved.append((folder, filename))
        return f"http://test/uploads/{folder}/{filename}"

    def save_base64(self, folder, base64_data, filename="upload.jpg"):
        return self.save_bytes(folder, base64_data.encode(), filename, "image/jpeg")


class FakeMailer:
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send_email(self, to: str, subject: str, body: str) -> None:
        if to in self.fail_for:
            raise RuntimeError("smtp down")
        self.sent.append((to, subject, body))


class FakeIdentityProvider:
    def __init__(self, users: FakeUserRepo):
        self.users = users

    def hash_password(self, password: str) -> str:
        return f"hashed:{password}"

    def authenticate(self, email: str, password: str) -> Optional[Identity]:
        u = self.users.get_by_email(email)
        if not u or u.password_hash != f"hashed:{password}":
            return None
        return Identity(id=u.id, email=u.email, role=u.role)


@pytest.fixture
def users():
    repo = FakeUserRepo()
    repo.add("pu", "pat@example.com", PATIENT)
    repo.add("du", "doc@example.com", DOCTOR)
    repo.add("lu", "lab@example.com", LAB_USER)
    return repo


@pytest.fixture
def profiles():
    repo = FakeProfileRepo()
    repo.patients[1] = PatientDto(1, "pu", "Alice", phone_number="555", family_medical_history="asthma", past_medical_history="none")
    repo.doctors[1] = DoctorDto(1, "du", "House", "Diagnostics", "09:00", "17:00")
    repo.lab_users[1] = LabUserDto(1, "lu", "Lab One")
    return repo


@pytest.fixture
def patient_ctx():
    return SessionContext("pu", "pat@example.com", PATIENT, PatientRole(patient_id=1, username="Alice"))


@pytest.fixture
def doctor_ctx():
    return SessionContext("du", "doc@example.com", DOCTOR, DoctorRole(doctor_id=1, username="House", available_time_from="09:00", available_time_to="17:00"))


@pytest.fixture
def lab_ctx():
    return SessionContext("lu", "lab@example.com", LAB_USER, LabUserRole(lab_user_id=1, username="Lab One"))


@pytest.fixture
def appt_repo():
    return FakeApptRepo()


@pytest.fixture
def reminders_repo():
    return FakeRemindersRepo()


@pytest.fixture
def consultations_repo():
    return FakeConsultationsRepo()


@pytest.fixture
def lab_reports_repo():
    return FakeLabReportsRepo()


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def identity_provider(users):
    return FakeIdentityProvider(users)


@pytest.fixture
def mailer():
    return FakeMailer()
