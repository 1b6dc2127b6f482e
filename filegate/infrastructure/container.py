# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from filegate.application.services.password_hashing import WerkzeugPasswordHasher
from filegate.application.services.path_resolver import PathResolver
from filegate.application.services.tokens import TokenService
from filegate.application.use_cases.storage.delete_path_content import (
    DeletePathContentUseCase,
)
from filegate.application.use_cases.storage.get_path_content import GetPathContentUseCase
from filegate.application.use_cases.storage.set_path_content import SetPathContentUseCase
from filegate.application.use_cases.users.authorize_token import AuthorizeTokenUseCase
from filegate.application.use_cases.users.login_user import LoginUserUseCase
from filegate.application.use_cases.users.logout_user import LogoutUserUseCase
from filegate.application.use_cases.users.register_user import (
    ChangePasswordUseCase,
    DeleteUserUseCase,
    RegisterUserUseCase,
)
from filegate.application.use_cases.users.sweep_sessions import SweepExpiredSessionsUseCase
from filegate.infrastructure.db import create_db_engine, create_session_factory, init_db
from filegate.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from filegate.infrastructure.storage import LocalFileStorage
from filegate.interfaces.http.controllers.auth_controller import AuthController
from filegate.interfaces.http.controllers.storage_controller import StorageController
from filegate.shared.clock import Clock, utc_now
from filegate.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, *, clock: Clock = utc_now) -> None:
        self.config = config
        self.clock = clock

    def init_db(self) -> None:
        init_db(self.engine)

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory)

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> TokenService:
        return TokenService(self.config.jwt_secret, clock=self.clock)

    @cached_property
    def path_resolver(self) -> PathResolver:
        return PathResolver(self.config.storage_root)

    @cached_property
    def storage(self) -> LocalFileStorage:
        return LocalFileStorage()

    # User use cases

    @cached_property
    def sweep_sessions_use_case(self) -> SweepExpiredSessionsUseCase:
        return SweepExpiredSessionsUseCase(sessions=self.session_repository, clock=self.clock)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
            sweeper=self.sweep_sessions_use_case,
            lifetime_seconds=self.config.token_lifetime_seconds,
            clock=self.clock,
        )

    @cached_property
    def authorize_token_use_case(self) -> AuthorizeTokenUseCase:
        return AuthorizeTokenUseCase(
            sessions=self.session_repository,
            tokens=self.token_service,
            clock=self.clock,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            paths=self.path_resolver,
            storage=self.storage,
            clock=self.clock,
        )

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository, sessions=self.session_repository)

    # Storage use cases

    @cached_property
    def get_path_content_use_case(self) -> GetPathContentUseCase:
        return GetPathContentUseCase(paths=self.path_resolver, storage=self.storage)

    @cached_property
    def set_path_content_use_case(self) -> SetPathContentUseCase:
        return SetPathContentUseCase(paths=self.path_resolver, storage=self.storage)

    @cached_property
    def delete_path_content_use_case(self) -> DeletePathContentUseCase:
        return DeletePathContentUseCase(paths=self.path_resolver, storage=self.storage)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            authorize_use_case=self.authorize_token_use_case,
            auth_header=self.config.auth_header,
        )

    @cached_property
    def storage_controller(self) -> StorageController:
        return StorageController(
            get_use_case=self.get_path_content_use_case,
            set_use_case=self.set_path_content_use_case,
            delete_use_case=self.delete_path_content_use_case,
            authorize_use_case=self.authorize_token_use_case,
            auth_header=self.config.auth_header,
        )


__all__ = ["Container"]
