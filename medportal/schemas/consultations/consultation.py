# medportal/schemas/consultations/consultation.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ConsultationCreate(BaseModel):
    doctor_id: int
    disease: str = Field(..., max_length=2000)
    access_allowed: bool = False


class PrescriptionUpdate(BaseModel):
    prescription: str = Field(..., max_length=5000)


class ConsultationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    disease: str
    prescription: str
    access_allowed: bool
    consulted_time: datetime
    doctor_name: Optional[str] = None
    patient_name: Optional[str] = None
    patient_phone: Optional[str] = None
    family_medical_history: Optional[str] = None
    past_medical_history: Optional[str] = None
