from datetime import datetime

import pytest
from fastapi import HTTPException

from medportal.application.services.appointments_service import AppointmentsService
from medportal.application.services.consultations_service import ConsultationsService
from medportal.application.services.dashboard_service import DashboardService
from medportal.application.services.lab_reports_service import LabReportsService
from medportal.domain.roles import DOCTOR, SessionContext


@pytest.fixture
def svc(profiles, users, appt_repo, consultations_repo, lab_reports_repo, media_store):
    return DashboardService(
        profile_repo=profiles,
        appointments=AppointmentsService(appt_repo, profiles, users, now=lambda: datetime(2025, 3, 1, 9, 0)),
        consultations=ConsultationsService(consultations_repo, profiles),
        lab_reports=LabReportsService(lab_reports_repo, profiles, media_store),
    )


def test_patient_dashboard(svc, patient_ctx):
    out = svc.for_context(patient_ctx)
    assert out["role"] == "patient"
    assert [d.username for d in out["doctors"]] == ["House"]
    assert out["upcoming_appointments"] == []


def test_doctor_dashboard(svc, doctor_ctx):
    out = svc.for_context(doctor_ctx)
    assert out["role"] == "doctor"
    assert set(out) == {"role", "appointment_requests", "consultations"}


def test_lab_dashboard(svc, lab_ctx):
    out = svc.for_context(lab_ctx)
    assert out["role"] == "labuser"
    assert [p.username for p in out["patients"]] == ["Alice"]


def test_dashboard_requires_personal_info(svc):
    with pytest.raises(HTTPException) as exc:
        svc.for_context(SessionContext("x", "x@example.com", DOCTOR))
    assert exc.value.status_code == 409
