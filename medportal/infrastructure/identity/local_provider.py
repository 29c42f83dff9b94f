from typing import Optional

from .passwords import hash_password, verify_password
from ...application.ports.identity_provider import IdentityProvider
from ...application.ports.user_repo import UserRepository
from ...domain.roles import Identity


class LocalIdentityProvider(IdentityProvider):
    """Email/password credentials checked against the users table."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def authenticate(self, email: str, password: str) -> Optional[Identity]:
        if not email or not password:
            return None
        user = self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return Identity(id=user.id, email=user.email, role=user.role)

    def hash_password(self, password: str) -> str:
        return hash_password(password)
