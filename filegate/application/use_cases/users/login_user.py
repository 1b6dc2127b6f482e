# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from filegate.application.services.tokens import TokenService
from filegate.application.use_cases.users.sweep_sessions import SweepExpiredSessionsUseCase
from filegate.domain.users.entities import Session
from filegate.domain.users.exceptions import InvalidCredentialsError
from filegate.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from filegate.shared.clock import Clock, utc_now
from filegate.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        tokens: TokenService,
        sweeper: SweepExpiredSessionsUseCase,
        lifetime_seconds: int,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._sweeper = sweeper
        self._lifetime_seconds = lifetime_seconds
        self._clock = clock

    def execute(self, login: str, password: str) -> Session:
        user = self._users.find_by_login(login)
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            logger.warning("auth.login: rejected credentials")
            raise InvalidCredentialsError()

        # Token iat/exp are whole seconds; keep the session row on the same grid.
        now = self._clock().replace(microsecond=0)
        self._sweeper.execute(now)

        token = self._tokens.issue(user.id, self._lifetime_seconds, now=now)
        session = self._sessions.add(
            Session(
                id=0,
                user_id=user.id,
                token=token,
                created_at=now,
                expires_at=now + timedelta(seconds=self._lifetime_seconds),
            )
        )
        logger.info(
            f"auth.login: ok user_id={user.id} session_id={session.id} "
            f"expires_at={session.expires_at.isoformat()}"
        )
        return session
