# medportal/db/models/users/profiles.py
from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from datetime import date, datetime

from ....core.clock import utc_now


class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    username: str = Field(max_length=100)
    phone_number: Optional[str] = Field(max_length=20, default=None)
    dob: Optional[date] = None
    gender: Optional[str] = Field(max_length=20, default=None)
    address: Optional[str] = None
    family_medical_history: Optional[str] = None
    past_medical_history: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    username: str = Field(max_length=100)
    phone_number: Optional[str] = Field(max_length=20, default=None)
    dob: Optional[date] = None
    gender: Optional[str] = Field(max_length=20, default=None)
    address: Optional[str] = None
    specialization: str = Field(max_length=100)
    available_time_from: str = Field(max_length=5)  # HH:MM
    available_time_to: str = Field(max_length=5)  # HH:MM
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class LabUser(SQLModel, table=True):
    __tablename__ = "lab_users"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    username: str = Field(max_length=100)
    phone_number: Optional[str] = Field(max_length=20, default=None)
    dob: Optional[date] = None
    gender: Optional[str] = Field(max_length=20, default=None)
    address: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
