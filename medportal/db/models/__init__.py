# Models package (re-export feature modules for stable imports)
from .users.user import User
from .users.profiles import Patient, Doctor, LabUser
from .health.appointment import Appointment
from .health.consultation import Consultation
from .health.lab_report import LabReport
from .health.reminder import ScheduledReminder

__all__ = [
    "User",
    "Patient",
    "Doctor",
    "LabUser",
    "Appointment",
    "Consultation",
    "LabReport",
    "ScheduledReminder",
]
