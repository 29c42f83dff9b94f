from typing import Optional, Protocol

from ...domain.roles import Identity


class IdentityProvider(Protocol):
    def authenticate(self, email: str, password: str) -> Optional[Identity]:
        ...

    def hash_password(self, password: str) -> str:
        ...
