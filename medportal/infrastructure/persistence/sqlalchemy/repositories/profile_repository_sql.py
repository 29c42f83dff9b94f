from typing import Any, Dict, List, Optional
from sqlmodel import Session, select

from .....db.models import User, Patient, Doctor, LabUser
from .....application.ports.profile_repo import (
    ProfileRepository,
    PatientDto,
    DoctorDto,
    LabUserDto,
)
from .....domain.roles import PATIENT, DOCTOR, LAB_USER, DEFAULT_PROFILE_PICTURES

ROLE_TABLES = {
    PATIENT: Patient,
    DOCTOR: Doctor,
    LAB_USER: LabUser,
}


class SqlProfileRepository(ProfileRepository):
    def __init__(self, session: Session):
        self.session = session

    def _picture(self, user_id: str, role: str) -> str:
        user = self.session.exec(select(User).where(User.id == user_id)).first()
        return (user.profile if user else None) or DEFAULT_PROFILE_PICTURES[role]

    def _patient_to_dto(self, p: Patient) -> PatientDto:
        return PatientDto(
            id=p.id,
            user_id=p.user_id,
            username=p.username,
            phone_number=p.phone_number,
            dob=p.dob,
            gender=p.gender,
            address=p.address,
            family_medical_history=p.family_medical_history,
            past_medical_history=p.past_medical_history,
            profile=self._picture(p.user_id, PATIENT),
        )

    def _doctor_to_dto(self, d: Doctor) -> DoctorDto:
        return DoctorDto(
            id=d.id,
            user_id=d.user_id,
            username=d.username,
            specialization=d.specialization,
            available_time_from=d.available_time_from,
            available_time_to=d.available_time_to,
            phone_number=d.phone_number,
            dob=d.dob,
            gender=d.gender,
            address=d.address,
            profile=self._picture(d.user_id, DOCTOR),
        )

    def _lab_user_to_dto(self, lab: LabUser) -> LabUserDto:
        return LabUserDto(
            id=lab.id,
            user_id=lab.user_id,
            username=lab.username,
            phone_number=lab.phone_number,
            dob=lab.dob,
            gender=lab.gender,
            address=lab.address,
            profile=self._picture(lab.user_id, LAB_USER),
        )

    def get_patient_by_user(self, user_id: str) -> Optional[PatientDto]:
        p = self.session.exec(select(Patient).where(Patient.user_id == user_id)).first()
        return self._patient_to_dto(p) if p else None

    def get_doctor_by_user(self, user_id: str) -> Optional[DoctorDto]:
        d = self.session.exec(select(Doctor).where(Doctor.user_id == user_id)).first()
        return self._doctor_to_dto(d) if d else None

    def get_lab_user_by_user(self, user_id: str) -> Optional[LabUserDto]:
        lab = self.session.exec(select(LabUser).where(LabUser.user_id == user_id)).first()
        return self._lab_user_to_dto(lab) if lab else None

    def get_patient(self, patient_id: int) -> Optional[PatientDto]:
        p = self.session.get(Patient, patient_id)
        return self._patient_to_dto(p) if p else None

    def get_doctor(self, doctor_id: int) -> Optional[DoctorDto]:
        d = self.session.get(Doctor, doctor_id)
        return self._doctor_to_dto(d) if d else None

    def get_lab_user(self, lab_user_id: int) -> Optional[LabUserDto]:
        lab = self.session.get(LabUser, lab_user_id)
        return self._lab_user_to_dto(lab) if lab else None

    def list_doctors(self, search: Optional[str] = None) -> List[DoctorDto]:
        query = select(Doctor)
        if search:
            query = query.where(Doctor.username.ilike(f"%{search}%"))
        return [self._doctor_to_dto(d) for d in self.session.exec(query.order_by(Doctor.username)).all()]

    def list_patients(self, search: Optional[str] = None) -> List[PatientDto]:
        query = select(Patient)
        if search:
            query = query.where(Patient.username.ilike(f"%{search}%"))
        return [self._patient_to_dto(p) for p in self.session.exec(query.order_by(Patient.username)).all()]

    def create_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        model = ROLE_TABLES[role]
        row = model(user_id=user_id, **fields)
        self.session.add(row)
        self.session.commit()

    def update_profile(self, role: str, user_id: str, fields: Dict[str, Any]) -> None:
        model = ROLE_TABLES[role]
        row = self.session.exec(select(model).where(model.user_id == user_id)).first()
        if not row:
            return
        for key, value in fields.items():
            if hasattr(row, key):
                setattr(row, key, value)
        self.session.add(row)
        self.session.commit()
