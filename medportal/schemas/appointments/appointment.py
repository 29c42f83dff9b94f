# medportal/schemas/appointments/appointment.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date, datetime


class AppointmentCreate(BaseModel):
    doctor_id: int
    appointment_date: str  # YYYY-MM-DD
    appointment_time: str  # HH:MM
    symptoms: str = Field("", max_length=2000)


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class AppointmentLists(BaseModel):
    upcoming: List[AppointmentResponse]
    past: List[AppointmentResponse]


class TakenTimesResponse(BaseModel):
    doctor_id: int
    appointment_date: str
    taken_times: List[str]
