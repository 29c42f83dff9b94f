from dataclasses import dataclass
from typing import Any, Dict

from fastapi import HTTPException

from .appointments_service import AppointmentsService
from .consultations_service import ConsultationsService
from .lab_reports_service import LabReportsService
from ..ports.profile_repo import ProfileRepository
from ...domain.roles import SessionContext, PatientRole, DoctorRole, LabUserRole


@dataclass
class DashboardService:
    profile_repo: ProfileRepository
    appointments: AppointmentsService
    consultations: ConsultationsService
    lab_reports: LabReportsService

    def for_context(self, ctx: SessionContext) -> Dict[str, Any]:
        """One view per role, chosen from the caller's role variant."""
        role = ctx.role
        if role is None:
            raise HTTPException(status_code=409, detail="Complete your personal info first")
        if isinstance(role, PatientRole):
            return {
                "role": role.name,
                "doctors": self.profile_repo.list_doctors(),
                "upcoming_appointments": self.appointments.list_for(ctx)["upcoming"],
                "consultations": self.consultations.list_for(ctx),
            }
        if isinstance(role, DoctorRole):
            return {
                "role": role.name,
                "appointment_requests": self.appointments.list_unaccepted(ctx),
                "consultations": self.consultations.list_for(ctx),
            }
        if isinstance(role, LabUserRole):
            return {
                "role": role.name,
                "patients": self.lab_reports.list_patients(ctx),
                "reports": self.lab_reports.list_for(ctx),
            }
        raise HTTPException(status_code=400, detail="Unknown role")
