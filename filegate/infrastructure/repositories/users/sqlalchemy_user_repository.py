# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from filegate.domain.users.entities import Session as DomainSession
from filegate.domain.users.entities import User as DomainUser
from filegate.domain.users.repositories import SessionRepository, UserRepository
from filegate.infrastructure.db.models import SessionRow, UserRow
from filegate.infrastructure.unit_of_work import unit_of_work_scope
from filegate.shared.clock import as_utc


def _user_to_domain(row: UserRow) -> DomainUser:
    return DomainUser(
        id=row.id,
        login=row.login,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
        session_ids=tuple(sorted(s.id for s in row.sessions)),
    )


def _session_to_domain(row: SessionRow) -> DomainSession:
    return DomainSession(
        id=row.id,
        user_id=row.user_id,
        token=row.token,
        created_at=as_utc(row.created_at),
        expires_at=as_utc(row.expires_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_login(self, login: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, label="users") as session:
            row = session.scalars(
                select(UserRow)
                .options(selectinload(UserRow.sessions))
                .where(UserRow.login == login)
            ).first()
            # SQL string equality may be case-insensitive depending on collation.
            if row is None or row.login != login:
                return None
            return _user_to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        with unit_of_work_scope(self._session_factory, label="users") as session:
            row = UserRow(
                login=user.login,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            session.add(row)
            session.flush()
            return _user_to_domain(row)

    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        with unit_of_work_scope(self._session_factory, label="users") as session:
            session.execute(
                update(UserRow).where(UserRow.id == user_id).values(password_hash=password_hash)
            )

    def delete(self, user_id: int) -> None:
        with unit_of_work_scope(self._session_factory, label="users") as session:
            # Sessions first; the FK cascade is not relied upon.
            session.execute(delete(SessionRow).where(SessionRow.user_id == user_id))
            session.execute(delete(UserRow).where(UserRow.id == user_id))


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, domain_session: DomainSession) -> DomainSession:
        with unit_of_work_scope(self._session_factory, label="sessions") as session:
            row = SessionRow(
                user_id=domain_session.user_id,
                token=domain_session.token,
                created_at=domain_session.created_at,
                expires_at=domain_session.expires_at,
            )
            session.add(row)
            session.flush()
            return DomainSession(
                id=row.id,
                user_id=domain_session.user_id,
                token=domain_session.token,
                created_at=domain_session.created_at,
                expires_at=domain_session.expires_at,
            )

    def find_by_token(self, token: str) -> DomainSession | None:
        with unit_of_work_scope(self._session_factory, label="sessions") as session:
            row = session.scalars(
                select(SessionRow).where(SessionRow.token == token).order_by(SessionRow.id)
            ).first()
            if row is None:
                return None
            return _session_to_domain(row)

    def delete_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory, label="sessions") as session:
            result = session.execute(delete(SessionRow).where(SessionRow.expires_at < now))
            return int(result.rowcount or 0)

    def revoke(self, token: str) -> int:
        with unit_of_work_scope(self._session_factory, label="sessions") as session:
            result = session.execute(delete(SessionRow).where(SessionRow.token == token))
            return int(result.rowcount or 0)

    def delete_for_user(self, user_id: int) -> int:
        with unit_of_work_scope(self._session_factory, label="sessions") as session:
            result = session.execute(delete(SessionRow).where(SessionRow.user_id == user_id))
            return int(result.rowcount or 0)
