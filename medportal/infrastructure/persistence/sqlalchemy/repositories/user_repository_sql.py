from typing import Optional
from sqlmodel import Session, select

from .....core.clock import utc_now
from .....db.models import User
from .....application.ports.user_repo import UserRepository, UserDto

class SqlUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, user: User) -> UserDto:
        return UserDto(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            profile=user.profile,
            created_at=user.created_at,
        )

    def _get(self, user_id: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.id == user_id)).first()

    def get_by_email(self, email: str) -> Optional[UserDto]:
        user = self.session.exec(select(User).where(User.email == email)).first()
        return self._to_dto(user) if user else None

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        user = self._get(user_id)
        return self._to_dto(user) if user else None

    def create(self, email: str, password_hash: str, role: str) -> UserDto:
        user = User(email=email, password_hash=password_hash, role=role)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return self._to_dto(user)

    def update_email(self, user_id: str, email: str) -> None:
        user = self._get(user_id)
        if not user:
            return
        user.email = email
        user.updated_at = utc_now()
        self.session.add(user)
        self.session.commit()

    def set_profile_picture(self, user_id: str, url: Optional[str]) -> None:
        user = self._get(user_id)
        if not user:
            return
        user.profile = url
        user.updated_at = utc_now()
        self.session.add(user)
        self.session.commit()
