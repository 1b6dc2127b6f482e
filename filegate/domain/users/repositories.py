# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Session, User


class UserRepository(Protocol):
    def find_by_login(self, login: str) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update_password_hash(self, user_id: int, password_hash: str) -> None: ...
    def delete(self, user_id: int) -> None: ...


class SessionRepository(Protocol):
    def add(self, session: Session) -> Session: ...
    def find_by_token(self, token: str) -> Session | None: ...
    def delete_expired(self, now: datetime) -> int: ...
    def revoke(self, token: str) -> int: ...
    def delete_for_user(self, user_id: int) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
