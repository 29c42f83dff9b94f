from typing import Optional
from dataclasses import dataclass
import logging

from fastapi import HTTPException

from ..ports.identity_provider import IdentityProvider
from ..ports.profile_repo import ProfileRepository
from ..ports.user_repo import UserRepository, UserDto
from ...domain.roles import (
    DOCTOR,
    LAB_USER,
    PATIENT,
    ROLES,
    DoctorRole,
    Identity,
    LabUserRole,
    PatientRole,
    Role,
    SessionContext,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    user_repo: UserRepository
    profile_repo: ProfileRepository
    identity_provider: IdentityProvider

    def register(self, email: str, password: str, role: str) -> UserDto:
        email = email.strip().lower()
        if role not in ROLES:
            raise HTTPException(status_code=400, detail=f"Invalid role. Must be one of: {list(ROLES)}")
        if self.user_repo.get_by_email(email):
            raise HTTPException(status_code=409, detail="Email is already registered. Please sign in.")
        user = self.user_repo.create(email, self.identity_provider.hash_password(password), role)
        logger.info(f"Registered {role} user {user.id}")
        return user

    def login(self, email: str, password: str) -> Identity:
        identity = self.identity_provider.authenticate(email.strip().lower(), password)
        if not identity:
            logger.warning("Login failed: invalid credentials")
            raise HTTPException(status_code=401, detail="Invalid email or password")
        return identity

    def _load_role(self, user: UserDto) -> Optional[Role]:
        if user.role == PATIENT:
            p = self.profile_repo.get_patient_by_user(user.id)
            return PatientRole(patient_id=p.id, username=p.username) if p else None
        if user.role == DOCTOR:
            d = self.profile_repo.get_doctor_by_user(user.id)
            if not d:
                return None
            return DoctorRole(
                doctor_id=d.id,
                username=d.username,
                available_time_from=d.available_time_from,
                available_time_to=d.available_time_to,
            )
        if user.role == LAB_USER:
            lab = self.profile_repo.get_lab_user_by_user(user.id)
            return LabUserRole(lab_user_id=lab.id, username=lab.username) if lab else None
        return None

    def resolve_context(self, user_id: str) -> SessionContext:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=401, detail="User not found")
        return SessionContext(
            user_id=user.id,
            email=user.email,
            role_name=user.role,
            role=self._load_role(user),
        )
