from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.application.exceptions import AuthenticationError
from app.application.ports.session_store import SessionStorePort
from app.domain.entities.admin_session import ROLE_ADMIN, AdminSession
from app.infrastructure.auth.passwords import verify_password
from app.infrastructure.auth.tokens import TokenService

INVALID_CREDENTIALS = "Invalid email or password."


class AdminAuthUseCase:
    """
    Issues and resolves admin sessions.

    A session is a signed token carrying a role claim. It lives until its
    expiry or until logout revokes it.
    """

    def __init__(
        self,
        tokens: TokenService,
        sessions: SessionStorePort,
        admin_email: str,
        admin_password_hash: str | None,
    ) -> None:
        self._tokens = tokens
        self._sessions = sessions
        self._admin_email = admin_email.strip().lower()
        self._admin_password_hash = admin_password_hash
        self._logger = logging.getLogger(__name__)

    def login(self, email: str, password: str) -> AdminSession:
        if not self._admin_password_hash:
            self._logger.error("Admin login attempted but ADMIN_PASSWORD_HASH is not set")
            raise AuthenticationError(INVALID_CREDENTIALS)

        normalized = email.strip().lower()
        password_ok = verify_password(password, self._admin_password_hash)
        if normalized != self._admin_email or not password_ok:
            self._logger.info("Admin login rejected", extra={"reason": "bad credentials"})
            raise AuthenticationError(INVALID_CREDENTIALS)

        token, claims = self._tokens.issue(subject=normalized, role=ROLE_ADMIN)
        self._logger.info("Admin login", extra={"reason": f"jti={claims['jti']}"})
        return _session_from_claims(token, claims)

    def resolve(self, token: str) -> AdminSession:
        claims = self._tokens.verify(token)
        if not claims:
            raise AuthenticationError("Session expired or invalid.")
        if self._sessions.is_revoked(claims.get("jti", "")):
            raise AuthenticationError("Session has been logged out.")
        session = _session_from_claims(token, claims)
        if not session.is_admin:
            raise AuthenticationError("Admin access required.")
        return session

    def logout(self, session: AdminSession) -> None:
        self._sessions.revoke(session.token_id, session.expires_at.timestamp())
        self._logger.info("Admin logout", extra={"reason": f"jti={session.token_id}"})


def _session_from_claims(token: str, claims: dict) -> AdminSession:
    return AdminSession(
        token=token,
        token_id=claims.get("jti", ""),
        email=claims.get("sub", ""),
        role=claims.get("role", ""),
        issued_at=datetime.fromtimestamp(claims.get("iat", 0), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(claims.get("exp", 0), tz=timezone.utc),
    )
