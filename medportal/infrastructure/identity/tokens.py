from datetime import timedelta
from typing import Optional, Dict, Any
import logging

import jwt

from ...core.clock import utc_now
from ...core.config import settings
from ...domain.roles import Identity

logger = logging.getLogger(__name__)


def create_access_token(identity: Identity, expires_minutes: Optional[int] = None) -> str:
    expire = utc_now() + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": identity.id,
        "email": identity.email,
        "role": identity.role,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a bearer token, returning None when it is unusable."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        return None
    if payload.get("type") != "access":
        return None
    return payload
