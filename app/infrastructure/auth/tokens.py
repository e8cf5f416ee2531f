from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

ALGORITHM = "HS256"

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(self, secret_key: str, ttl_minutes: int = 60) -> None:
        self._secret_key = secret_key
        self._ttl = timedelta(minutes=ttl_minutes)

    def issue(self, subject: str, role: str, now: datetime | None = None) -> tuple[str, dict[str, Any]]:
        """Create a signed token. Returns (token, claims)."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": subject,
            "role": role,
            "jti": uuid.uuid4().hex,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM), claims

    def verify(self, token: str) -> dict[str, Any] | None:
        """Decode and check signature and expiry. None if invalid or expired."""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            logger.warning("Token verification failed", extra={"reason": str(e)})
            return None
