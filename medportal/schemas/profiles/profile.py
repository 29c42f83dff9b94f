# medportal/schemas/profiles/profile.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import date


class PersonalInfoBase(BaseModel):
    username: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=20)
    dob: Optional[str] = Field(None, description="YYYY-MM-DD")
    gender: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    # doctor
    specialization: Optional[str] = Field(None, max_length=100)
    available_time_from: Optional[str] = Field(None, description="HH:MM")
    available_time_to: Optional[str] = Field(None, description="HH:MM")
    # patient
    family_medical_history: Optional[str] = None
    past_medical_history: Optional[str] = None


class PersonalInfoCreate(PersonalInfoBase):
    username: str = Field(..., min_length=1, max_length=100)


class ProfileUpdate(PersonalInfoBase):
    email: Optional[str] = Field(None, max_length=255)


class PatientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class DoctorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class LabUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    username: str
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    profile: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    role: str
    profile: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class PictureResponse(BaseModel):
    success: bool = True
    profile: str
