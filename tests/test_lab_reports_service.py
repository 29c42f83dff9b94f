import pytest
from fastapi import HTTPException

from medportal.application.services.lab_reports_service import LabReportsService


@pytest.fixture
def svc(lab_reports_repo, profiles, media_store):
    return LabReportsService(repo=lab_reports_repo, profile_repo=profiles, media_store=media_store)


def test_upload_and_list(svc, lab_ctx, patient_ctx, media_store):
    report = svc.upload(lab_ctx, 1, " Blood test ", b"img", "blood.png", "image/png")
    assert report.title == "Blood test"
    assert report.report_url.endswith("/lab_reports/blood.png")
    assert media_store.saved == [("lab_reports", "blood.png")]
    assert [r.id for r in svc.list_for(lab_ctx)] == [report.id]
    assert [r.id for r in svc.list_for(patient_ctx)] == [report.id]


def test_upload_base64(svc, lab_ctx):
    report = svc.upload_base64(lab_ctx, 1, "X-ray", "aGVsbG8=")
    assert "/lab_reports/" in report.report_url


def test_upload_requires_title_and_patient(svc, lab_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.upload(lab_ctx, 1, "", b"img", "a.png", "image/png")
    assert exc.value.status_code == 400
    with pytest.raises(HTTPException) as exc:
        svc.upload(lab_ctx, 42, "t", b"img", "a.png", "image/png")
    assert exc.value.status_code == 404


def test_only_lab_users_upload(svc, patient_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.upload(patient_ctx, 1, "t", b"img", "a.png", "image/png")
    assert exc.value.status_code == 403


def test_doctor_has_no_reports(svc, doctor_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.list_for(doctor_ctx)
    assert exc.value.status_code == 403


def test_list_patients_search(svc, lab_ctx):
    assert [p.username for p in svc.list_patients(lab_ctx, "ali")] == ["Alice"]
    assert svc.list_patients(lab_ctx, "zzz") == []
