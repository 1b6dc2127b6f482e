# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.shared.errors.base import ConflictError, NotFoundError, UnauthorizedError


class UserAlreadyExistsError(ConflictError):
    default_code = "user_already_exists"


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"


class InvalidCredentialsError(UnauthorizedError):
    default_code = "invalid_credentials"


class MissingTokenError(UnauthorizedError):
    default_code = "token_missing"


class SessionNotFoundError(UnauthorizedError):
    default_code = "session_not_found"


class SessionExpiredError(UnauthorizedError):
    default_code = "session_expired"


class InvalidTokenError(UnauthorizedError):
    default_code = "invalid_token"

    def __init__(self, reason: str) -> None:
        super().__init__(context={"reason": reason})
