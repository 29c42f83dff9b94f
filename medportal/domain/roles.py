"""Role variants and the per-request session context."""
from dataclasses import dataclass
from typing import Optional, Union

PATIENT = "patient"
DOCTOR = "doctor"
LAB_USER = "labuser"

ROLES = (PATIENT, DOCTOR, LAB_USER)

DEFAULT_PROFILE_PICTURES = {
    PATIENT: "/patient.png",
    DOCTOR: "/doctor.jpg",
    LAB_USER: "/patient.png",
}


@dataclass(frozen=True)
class PatientRole:
    patient_id: int
    username: str
    name = PATIENT


@dataclass(frozen=True)
class DoctorRole:
    doctor_id: int
    username: str
    available_time_from: str
    available_time_to: str
    name = DOCTOR


@dataclass(frozen=True)
class LabUserRole:
    lab_user_id: int
    username: str
    name = LAB_USER


Role = Union[PatientRole, DoctorRole, LabUserRole]


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    role: str


@dataclass(frozen=True)
class SessionContext:
    """Authenticated caller handed to every service call.

    ``role`` is None until the user has filled in personal info for their role.
    """
    user_id: str
    email: str
    role_name: str
    role: Optional[Role] = None

    @property
    def has_profile(self) -> bool:
        return self.role is not None
