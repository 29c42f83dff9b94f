from typing import Protocol, Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserDto:
    id: str
    email: str
    password_hash: str
    role: str
    profile: Optional[str]
    created_at: datetime


class UserRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[UserDto]:
        ...

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        ...

    def create(self, email: str, password_hash: str, role: str) -> UserDto:
        ...

    def update_email(self, user_id: str, email: str) -> None:
        ...

    def set_profile_picture(self, user_id: str, url: Optional[str]) -> None:
        ...
