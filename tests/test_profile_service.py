from datetime import date

import pytest
from fastapi import HTTPException

from medportal.application.services.profile_service import ProfileService
from medportal.domain.roles import DOCTOR, PATIENT, SessionContext


@pytest.fixture
def svc(users, profiles, media_store):
    return ProfileService(user_repo=users, profile_repo=profiles, media_store=media_store)


def new_ctx(users, role):
    user = users.create(f"{role}-new@example.com", "h", role)
    return SessionContext(user.id, user.email, role)


def test_create_patient_info(svc, users, profiles):
    ctx = new_ctx(users, PATIENT)
    out = svc.create_personal_info(ctx, {"username": "Bob", "dob": "1990-05-01", "specialization": "ignored"})
    assert out.username == "Bob"
    assert out.dob == date(1990, 5, 1)
    assert not hasattr(out, "specialization")


def test_create_doctor_info_requires_window(svc, users):
    ctx = new_ctx(users, DOCTOR)
    with pytest.raises(HTTPException) as exc:
        svc.create_personal_info(ctx, {"username": "Who", "specialization": "GP"})
    assert exc.value.status_code == 400


def test_create_doctor_info_rejects_inverted_window(svc, users):
    ctx = new_ctx(users, DOCTOR)
    with pytest.raises(HTTPException) as exc:
        svc.create_personal_info(ctx, {"username": "Who", "specialization": "GP", "available_time_from": "17:00", "available_time_to": "09:00"})
    assert exc.value.status_code == 400


def test_create_doctor_info(svc, users):
    ctx = new_ctx(users, DOCTOR)
    out = svc.create_personal_info(ctx, {"username": "Who", "specialization": "GP", "available_time_from": "08:00:00", "available_time_to": "12:30"})
    assert (out.available_time_from, out.available_time_to) == ("08:00", "12:30")


def test_create_twice_conflicts(svc, patient_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.create_personal_info(patient_ctx, {"username": "Alice"})
    assert exc.value.status_code == 409


def test_create_requires_username(svc, users):
    ctx = new_ctx(users, PATIENT)
    with pytest.raises(HTTPException) as exc:
        svc.create_personal_info(ctx, {"username": "  "})
    assert exc.value.status_code == 400


def test_get_profile_uses_default_picture(svc, patient_ctx, doctor_ctx):
    out = svc.get_profile(patient_ctx)
    assert out["profile"] == "/patient.png"
    assert out["details"]["username"] == "Alice"
    assert svc.get_profile(doctor_ctx)["profile"] == "/doctor.jpg"


def test_update_profile_fields_and_email(svc, patient_ctx, profiles, users):
    out = svc.update_profile(patient_ctx, {"email": "Alice@Example.com", "address": "1 Main St"})
    assert out["email"] == "alice@example.com"
    assert profiles.patients[1].address == "1 Main St"
    assert users.get_by_id("pu").email == "alice@example.com"


def test_update_profile_email_taken(svc, patient_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.update_profile(patient_ctx, {"email": "doc@example.com"})
    assert exc.value.status_code == 409


def test_update_profile_bad_dob_keeps_email(svc, patient_ctx, users, profiles):
    with pytest.raises(HTTPException) as exc:
        svc.update_profile(patient_ctx, {"email": "new@example.com", "dob": "01/02/1990"})
    assert exc.value.status_code == 400
    assert users.get_by_id("pu").email == "pat@example.com"
    assert profiles.patients[1].dob is None


def test_update_doctor_inverted_window_keeps_email(svc, doctor_ctx, users, profiles):
    with pytest.raises(HTTPException) as exc:
        svc.update_profile(doctor_ctx, {"email": "new@example.com", "available_time_from": "18:00", "available_time_to": "08:00"})
    assert exc.value.status_code == 400
    assert users.get_by_id("du").email == "doc@example.com"
    assert profiles.doctors[1].available_time_from == "09:00"


def test_update_doctor_window_checked_against_current(svc, doctor_ctx):
    with pytest.raises(HTTPException) as exc:
        svc.update_profile(doctor_ctx, {"available_time_from": "18:00"})
    assert exc.value.status_code == 400


def test_upload_profile_picture(svc, patient_ctx, users, media_store):
    url = svc.upload_profile_picture(patient_ctx, b"img", "me.png", "image/png")
    assert url == "http://test/uploads/profile_pictures/me.png"
    assert users.get_by_id("pu").profile == url
    assert svc.get_profile(patient_ctx)["profile"] == url
