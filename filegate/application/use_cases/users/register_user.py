# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.application.services.path_resolver import PathResolver
from filegate.domain.storage.ports import StoragePort
from filegate.domain.users.entities import User
from filegate.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from filegate.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from filegate.shared.clock import Clock, utc_now
from filegate.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        paths: PathResolver,
        storage: StoragePort,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._paths = paths
        self._storage = storage
        self._clock = clock

    def execute(self, login: str, password: str) -> User:
        existing = self._users.find_by_login(login)
        if existing:
            raise UserAlreadyExistsError(context={"login": login})
        hashed = self._password_hasher.hash(password)
        user = User(id=0, login=login, password_hash=hashed, created_at=self._clock())
        persisted = self._users.add(user)
        self._storage.ensure_directory(self._paths.root_of(persisted.id))
        logger.info(f"users.register: ok user_id={persisted.id}")
        return persisted


class ChangePasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, login: str, new_password: str) -> None:
        user = self._users.find_by_login(login)
        if user is None:
            raise UserNotFoundError(context={"login": login})
        self._users.update_password_hash(user.id, self._password_hasher.hash(new_password))
        revoked = self._sessions.delete_for_user(user.id)
        logger.info(f"users.password: changed user_id={user.id} revoked_sessions={revoked}")


class DeleteUserUseCase:
    def __init__(self, *, users: UserRepository, sessions: SessionRepository) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, login: str) -> None:
        user = self._users.find_by_login(login)
        if user is None:
            raise UserNotFoundError(context={"login": login})
        revoked = self._sessions.delete_for_user(user.id)
        self._users.delete(user.id)
        logger.info(f"users.delete: ok user_id={user.id} revoked_sessions={revoked}")
