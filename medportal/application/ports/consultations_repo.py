from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime


@dataclass
class ConsultationDto:
    id: int
    patient_id: int
    doctor_id: int
    disease: str
    prescription: str
    access_allowed: bool
    consulted_time: datetime
    doctor_name: Optional[str] = None
    patient_name: Optional[str] = None


class ConsultationsRepository:
    def create(self, patient_id: int, doctor_id: int, disease: str, access_allowed: bool) -> ConsultationDto:
        ...

    def get_by_id(self, consultation_id: int) -> Optional[ConsultationDto]:
        ...

    def list_for_patient(self, patient_id: int) -> List[ConsultationDto]:
        ...

    def list_for_doctor(self, doctor_id: int) -> List[ConsultationDto]:
        ...

    def update_prescription(self, consultation_id: int, prescription: str) -> ConsultationDto:
        ...

    def delete(self, consultation_id: int) -> None:
        ...
