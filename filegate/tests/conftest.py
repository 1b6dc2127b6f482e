from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask

from filegate.app import create_app
from filegate.application.services.path_resolver import PathResolver
from filegate.application.services.tokens import TokenService
from filegate.domain.users.entities import Session, User
from filegate.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from filegate.infrastructure.container import Container
from filegate.infrastructure.storage import LocalFileStorage
from filegate.shared.config import AppConfig, DatabaseConfig

TEST_SECRET = "test-secret-key"
LIFETIME = 3600


class FixedClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_login(self, login: str) -> User | None:
        for user in self._users.values():
            if user.login == login:
                return user
        return None

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        self._users[user_id] = replace(self._users[user_id], password_hash=password_hash)

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemorySessionRepository(SessionRepository):
    def __init__(self) -> None:
        self.rows: dict[int, Session] = {}
        self._seq = 1

    def add(self, session: Session) -> Session:
        stored = replace(session, id=self._seq)
        self._seq += 1
        self.rows[stored.id] = stored
        return stored

    def find_by_token(self, token: str) -> Session | None:
        for session in self.rows.values():
            if session.token == token:
                return session
        return None

    def delete_expired(self, now: datetime) -> int:
        expired = [sid for sid, s in self.rows.items() if s.expires_at < now]
        for sid in expired:
            del self.rows[sid]
        return len(expired)

    def revoke(self, token: str) -> int:
        matching = [sid for sid, s in self.rows.items() if s.token == token]
        for sid in matching:
            del self.rows[sid]
        return len(matching)

    def delete_for_user(self, user_id: int) -> int:
        owned = [sid for sid, s in self.rows.items() if s.user_id == user_id]
        for sid in owned:
            del self.rows[sid]
        return len(owned)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def tokens(clock: FixedClock) -> TokenService:
    return TokenService(TEST_SECRET, clock=clock)


@pytest.fixture()
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture()
def paths(storage_root: Path) -> PathResolver:
    return PathResolver(storage_root)


@pytest.fixture()
def storage() -> LocalFileStorage:
    return LocalFileStorage()


@pytest.fixture()
def app_config(tmp_path: Path, storage_root: Path) -> AppConfig:
    return AppConfig(
        JWT_SECRET=TEST_SECRET,
        TOKEN_LIFETIME_SECONDS=LIFETIME,
        STORAGE_ROOT=storage_root,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'filegate.db'}"),
    )


@pytest.fixture()
def container(app_config: AppConfig, clock: FixedClock) -> Iterator[Container]:
    container = Container(app_config, clock=clock)
    yield container
    container.engine.dispose()


@pytest.fixture()
def app(app_config: AppConfig, container: Container) -> Flask:
    flask_app = create_app(app_config, container=container)
    flask_app.config.update(TESTING=True)
    return flask_app
