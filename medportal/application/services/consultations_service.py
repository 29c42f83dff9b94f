from dataclasses import asdict, dataclass
from typing import Any, Dict, List
import logging

from fastapi import HTTPException

from ..ports.consultations_repo import ConsultationsRepository, ConsultationDto
from ..ports.profile_repo import ProfileRepository
from .guards import require_doctor, require_patient
from ...domain.roles import SessionContext, PatientRole, DoctorRole

logger = logging.getLogger(__name__)


@dataclass
class ConsultationsService:
    repo: ConsultationsRepository
    profile_repo: ProfileRepository

    def create(self, ctx: SessionContext, doctor_id: int, disease: str, access_allowed: bool) -> ConsultationDto:
        patient = require_patient(ctx)
        if not disease or not disease.strip():
            raise HTTPException(status_code=400, detail="Please enter a disease or symptoms.")
        if not access_allowed:
            raise HTTPException(status_code=400, detail="You must allow the doctor to access your medical records.")
        if not self.profile_repo.get_doctor(doctor_id):
            raise HTTPException(status_code=404, detail="Doctor not found")
        consultation = self.repo.create(patient.patient_id, doctor_id, disease.strip(), access_allowed)
        logger.info(f"Consultation {consultation.id} created by patient {patient.patient_id}")
        return consultation

    def list_for(self, ctx: SessionContext) -> List[Dict[str, Any]]:
        if isinstance(ctx.role, PatientRole):
            return [asdict(c) for c in self.repo.list_for_patient(ctx.role.patient_id)]
        if isinstance(ctx.role, DoctorRole):
            out = []
            for c in self.repo.list_for_doctor(ctx.role.doctor_id):
                patient = self.profile_repo.get_patient(c.patient_id)
                item = {
                    **asdict(c),
                    "patient_name": patient.username if patient else c.patient_name,
                    "patient_phone": patient.phone_number if patient else None,
                    "family_medical_history": None,
                    "past_medical_history": None,
                }
                if c.access_allowed and patient:
                    item["family_medical_history"] = patient.family_medical_history
                    item["past_medical_history"] = patient.past_medical_history
                out.append(item)
            return out
        raise HTTPException(status_code=403, detail="Only patients and doctors have consultations")

    def _doctor_consultation(self, ctx: SessionContext, consultation_id: int) -> ConsultationDto:
        doctor = require_doctor(ctx)
        consultation = self.repo.get_by_id(consultation_id)
        if not consultation or consultation.doctor_id != doctor.doctor_id:
            raise HTTPException(status_code=404, detail="Consultation not found")
        return consultation

    def patient_history(self, ctx: SessionContext, consultation_id: int) -> List[ConsultationDto]:
        """The patient's other consultations, visible only when access was granted."""
        consultation = self._doctor_consultation(ctx, consultation_id)
        if not consultation.access_allowed:
            raise HTTPException(status_code=403, detail="Patient has not allowed access to medical records")
        return [c for c in self.repo.list_for_patient(consultation.patient_id) if c.id != consultation.id]

    def update_prescription(self, ctx: SessionContext, consultation_id: int, prescription: str) -> ConsultationDto:
        self._doctor_consultation(ctx, consultation_id)
        return self.repo.update_prescription(consultation_id, prescription)

    def delete(self, ctx: SessionContext, consultation_id: int) -> None:
        patient = require_patient(ctx)
        consultation = self.repo.get_by_id(consultation_id)
        if not consultation or consultation.patient_id != patient.patient_id:
            raise HTTPException(status_code=404, detail="Consultation not found")
        self.repo.delete(consultation_id)
