from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import date


@dataclass
class PatientDto:
    id: int
    user_id: str
    username: str
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    family_medical_history: Optional[str] = None
    past_medical_history: Optional[str] = None
    profile: Optional[str] = None


@dataclass
class DoctorDto:
    id: int
    user_id: str
    username: str
    specialization: str
    available_time_from: str
    available_time_to: str
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    profile: Optional[str] = None


@dataclass
class LabUserDto:
    id: int
    user_id: str
    username: str
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    profile: Optional[str] = None


class ProfileRepository:
    """Role-specific personal info (patients, doctors, lab_users tables)."""

    def get_patient_by_user(self, user_id: str) -> Optional[PatientDto]:
        ...

    def get_doctor_by_user(self, user_id: str) -> Optional[DoctorDto]:
        ...

    def get_lab_user_by_user(self, user_id: str) -> Optional[LabUserDto]:
        ...

    def get_patient(self, patient_id: int) -> Optional[PatientDto]:
        ...

    def get_doctor(self, doctor_id: int) -> Optional[DoctorDto]:
        ...

    def get_lab_user(self, lab_user_id: int) -> Optional[LabUserDto]:
        ...

    def list_doctors(self, search: Optional[str] = None) -> List[DoctorDto]:
        ...

    def list_patients(self, search: Optional[str] = None) -> List[PatientDto]:
        ...

    def create_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        ...

    def update_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        ...
