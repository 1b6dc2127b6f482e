# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.application.services.tokens import TokenService
from filegate.domain.users.exceptions import (
    MissingTokenError,
    SessionExpiredError,
    SessionNotFoundError,
)
from filegate.domain.users.repositories import SessionRepository
from filegate.shared.clock import Clock, utc_now
from filegate.shared.logging import logger


class AuthorizeTokenUseCase:
    """Map a presented token to the user id that owns the request.

    The session row is looked up first: a revoked or swept session rejects the
    token even while its signature and ``exp`` are still valid.
    """

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        tokens: TokenService,
        clock: Clock = utc_now,
    ) -> None:
        self._sessions = sessions
        self._tokens = tokens
        self._clock = clock

    def execute(self, token: str | None) -> int:
        if not token:
            raise MissingTokenError()

        session = self._sessions.find_by_token(token)
        if session is None:
            logger.warning("auth.authorize: no session for presented token")
            raise SessionNotFoundError()

        if session.is_expired(self._clock()):
            logger.info(f"auth.authorize: session expired session_id={session.id}")
            raise SessionExpiredError()

        # InvalidTokenError is an UnauthorizedError; let it propagate as is.
        claims = self._tokens.verify(token)

        logger.debug(f"auth.authorize: ok user_id={claims.user_id}")
        return claims.user_id
