from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class Identity:
    """Who is calling, as carried in the session token."""

    user_id: str
    role: Role
    email: str = ""
    first_name: str = ""
    last_name: str = ""


class TokenService:
    """Issue and verify HS256 session tokens."""

    algorithm = "HS256"

    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(hours=int(expires_hours))

    @property
    def max_age_seconds(self) -> int:
        return int(self._expires.total_seconds())

    def issue(self, identity: Identity, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": identity.user_id,
            "role": identity.role.value,
            "email": identity.email,
            "firstName": identity.first_name,
            "lastName": identity.last_name,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
            return Identity(
                user_id=str(payload["userId"]),
                role=Role(payload["role"]),
                email=payload.get("email", ""),
                first_name=payload.get("firstName", ""),
                last_name=payload.get("lastName", ""),
            )
        except (jwt.PyJWTError, KeyError, ValueError):
            raise AuthenticationError("Invalid or expired token")
