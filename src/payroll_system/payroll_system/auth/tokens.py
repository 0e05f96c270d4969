from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_MINUTES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.model import User
from .principal import Principal

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

NO_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid token"


def extract_bearer(auth_header: Optional[str]) -> Optional[str]:
    """Extract the token from an Authorization header.

    Returns None when the header is absent or blank. A header that is present
    but not of the form 'Bearer <token>' raises, so callers can tell
    "no credential" apart from "bad credential".
    """
    if auth_header is None or not auth_header.strip():
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError(INVALID_TOKEN)
    return parts[1]


class TokenService:
    """Issues and verifies self-contained bearer credentials (JWT, HS256).

    Claims: id, role, iat, exp. Verification needs no store lookup.
    """

    def __init__(self, secret: str, *, expires_minutes: int = DEFAULT_TOKEN_MINUTES):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(minutes=int(expires_minutes))

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "id": user.user_id,
            "role": user.role.value,
            "iat": issued_at,
            "exp": issued_at + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def authenticate(self, credential: Optional[str]) -> Principal:
        if credential is None or not credential.strip():
            raise AuthenticationError(NO_TOKEN)

        try:
            payload = jwt.decode(credential.strip(), self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise AuthenticationError(INVALID_TOKEN)
        except jwt.InvalidTokenError:
            logger.warning("Rejected invalid token")
            raise AuthenticationError(INVALID_TOKEN)

        user_id = payload.get("id")
        try:
            role = Role(payload.get("role"))
            uid = int(user_id)
        except (ValueError, TypeError):
            logger.warning("Rejected token with malformed claims")
            raise AuthenticationError(INVALID_TOKEN)

        return Principal(user_id=uid, role=role)

    def authenticate_header(self, auth_header: Optional[str]) -> Principal:
        return self.authenticate(extract_bearer(auth_header))
