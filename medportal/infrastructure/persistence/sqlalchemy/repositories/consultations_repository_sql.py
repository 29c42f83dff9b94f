from typing import List, Optional
from sqlmodel import Session, select

from .....db.models import Consultation, Doctor, Patient
from .....application.ports.consultations_repo import ConsultationsRepository, ConsultationDto


class SqlConsultationsRepository(ConsultationsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, c: Consultation) -> ConsultationDto:
        doctor = self.session.get(Doctor, c.doctor_id)
        patient = self.session.get(Patient, c.patient_id)
        return ConsultationDto(
            id=c.id,
            patient_id=c.patient_id,
            doctor_id=c.doctor_id,
            disease=c.disease,
            prescription=c.prescription,
            access_allowed=c.access_allowed,
            consulted_time=c.consulted_time,
            doctor_name=doctor.username if doctor else None,
            patient_name=patient.username if patient else None,
        )

    def create(self, patient_id: int, doctor_id: int, disease: str, access_allowed: bool) -> ConsultationDto:
        c = Consultation(
            patient_id=patient_id,
            doctor_id=doctor_id,
            disease=disease,
            access_allowed=access_allowed,
            prescription="",
        )
        self.session.add(c)
        self.session.commit()
        self.session.refresh(c)
        return self._to_dto(c)

    def get_by_id(self, consultation_id: int) -> Optional[ConsultationDto]:
        c = self.session.get(Consultation, consultation_id)
        return self._to_dto(c) if c else None

    def list_for_patient(self, patient_id: int) -> List[ConsultationDto]:
        rows = self.session.exec(
            select(Consultation)
            .where(Consultation.patient_id == patient_id)
            .order_by(Consultation.consulted_time.desc())
        ).all()
        return [self._to_dto(r) for r in rows]

    def list_for_doctor(self, doctor_id: int) -> List[ConsultationDto]:
        rows = self.session.exec(
            select(Consultation)
            .where(Consultation.doctor_id == doctor_id)
            .order_by(Consultation.consulted_time.desc())
        ).all()
        return [self._to_dto(r) for r in rows]

    def update_prescription(self, consultation_id: int, prescription: str) -> ConsultationDto:
        c = self.session.get(Consultation, consultation_id)
        c.prescription = prescription
        self.session.add(c)
        self.session.commit()
        self.session.refresh(c)
        return self._to_dto(c)

    def delete(self, consultation_id: int) -> None:
        c = self.session.get(Consultation, consultation_id)
        if not c:
            return
        self.session.delete(c)
        self.session.commit()
