"""Use-case for revoking access tokens."""

from __future__ import annotations

from filegate.domain.users.repositories import SessionRepository
from filegate.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> int:
        if not token:
            return 0
        removed = self._sessions.revoke(token)
        logger.info(f"auth.logout: revoked sessions={removed}")
        return removed
