from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union
import logging

from fastapi import HTTPException

from ..ports.media_store import MediaStore
from ..ports.profile_repo import ProfileRepository, PatientDto, DoctorDto, LabUserDto
from ..ports.user_repo import UserRepository
from ...domain.roles import DOCTOR, PATIENT, LAB_USER, DEFAULT_PROFILE_PICTURES, SessionContext
from ...domain.scheduling import parse_date, parse_time

logger = logging.getLogger(__name__)

PROFILE_PICTURES_FOLDER = "profile_pictures"

COMMON_FIELDS = {"username", "phone_number", "dob", "gender", "address"}
ROLE_FIELDS = {
    PATIENT: COMMON_FIELDS | {"family_medical_history", "past_medical_history"},
    DOCTOR: COMMON_FIELDS | {"specialization", "available_time_from", "available_time_to"},
    LAB_USER: COMMON_FIELDS,
}

Profile = Union[PatientDto, DoctorDto, LabUserDto]


@dataclass
class ProfileService:
    user_repo: UserRepository
    profile_repo: ProfileRepository
    media_store: Optional[MediaStore] = None

    def _clean_fields(self, role: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        allowed = ROLE_FIELDS.get(role)
        if allowed is None:
            raise HTTPException(status_code=400, detail="Unknown role")
        cleaned = {k: v for k, v in fields.items() if k in allowed and v is not None}
        if "dob" in cleaned:
            try:
                cleaned["dob"] = parse_date(cleaned["dob"])
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid dob format. Use YYYY-MM-DD")
        for key in ("available_time_from", "available_time_to"):
            if key in cleaned:
                try:
                    cleaned[key] = parse_time(cleaned[key]).strftime("%H:%M")
                except ValueError:
                    raise HTTPException(status_code=400, detail=f"Invalid {key} format. Use HH:MM")
        return cleaned

    def _check_window(self, available_from: Optional[str], available_to: Optional[str]) -> None:
        if not available_from or not available_to:
            raise HTTPException(status_code=400, detail="Doctors must provide available_time_from and available_time_to")
        if parse_time(available_from) > parse_time(available_to):
            raise HTTPException(status_code=400, detail="available_time_from must not be after available_time_to")

    def create_personal_info(self, ctx: SessionContext, fields: Dict[str, Any]) -> Profile:
        if ctx.has_profile:
            raise HTTPException(status_code=409, detail="Personal info already submitted")
        cleaned = self._clean_fields(ctx.role_name, fields)
        if not str(cleaned.get("username") or "").strip():
            raise HTTPException(status_code=400, detail="username is required")
        if ctx.role_name == DOCTOR:
            if not str(cleaned.get("specialization") or "").strip():
                raise HTTPException(status_code=400, detail="specialization is required")
            self._check_window(cleaned.get("available_time_from"), cleaned.get("available_time_to"))
        self.profile_repo.create_profile(ctx.role_name, ctx.user_id, cleaned)
        logger.info(f"Created {ctx.role_name} profile for user {ctx.user_id}")
        return self._require_profile(ctx)

    def _find_profile(self, ctx: SessionContext) -> Optional[Profile]:
        if ctx.role_name == PATIENT:
            return self.profile_repo.get_patient_by_user(ctx.user_id)
        if ctx.role_name == DOCTOR:
            return self.profile_repo.get_doctor_by_user(ctx.user_id)
        if ctx.role_name == LAB_USER:
            return self.profile_repo.get_lab_user_by_user(ctx.user_id)
        return None

    def _require_profile(self, ctx: SessionContext) -> Profile:
        profile = self._find_profile(ctx)
        if not profile:
            raise HTTPException(status_code=404, detail="Personal info not found")
        return profile

    def get_profile(self, ctx: SessionContext) -> Dict[str, Any]:
        user = self.user_repo.get_by_id(ctx.user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        profile = self._find_profile(ctx)
        return {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "profile": user.profile or DEFAULT_PROFILE_PICTURES.get(user.role),
            "details": asdict(profile) if profile else None,
        }

    def update_profile(self, ctx: SessionContext, fields: Dict[str, Any]) -> Dict[str, Any]:
        # Validate everything before the first write
        cleaned = self._clean_fields(ctx.role_name, {k: v for k, v in fields.items() if k != "email"})
        if cleaned:
            current = self._require_profile(ctx)
            if ctx.role_name == DOCTOR and ({"available_time_from", "available_time_to"} & cleaned.keys()):
                self._check_window(
                    cleaned.get("available_time_from", current.available_time_from),
                    cleaned.get("available_time_to", current.available_time_to),
                )

        email = (fields.get("email") or "").strip().lower()
        if email:
            existing = self.user_repo.get_by_email(email)
            if existing and existing.id != ctx.user_id:
                raise HTTPException(status_code=409, detail="Email is already registered")

        if cleaned:
            self.profile_repo.update_profile(ctx.role_name, ctx.user_id, cleaned)
        if email:
            self.user_repo.update_email(ctx.user_id, email)
        return self.get_profile(ctx)

    def upload_profile_picture(self, ctx: SessionContext, data: bytes, filename: str, content_type: str) -> str:
        if self.media_store is None:
            raise HTTPException(status_code=500, detail="Media store is not configured")
        url = self.media_store.save_bytes(PROFILE_PICTURES_FOLDER, data, filename, content_type)
        self.user_repo.set_profile_picture(ctx.user_id, url)
        logger.info(f"Updated profile picture for user {ctx.user_id}")
        return url
