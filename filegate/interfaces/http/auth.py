# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import TypeVar, cast

from flask import g, request

from filegate.application.use_cases.users.authorize_token import AuthorizeTokenUseCase
from filegate.shared.errors import UnauthorizedError
from filegate.shared.logging import logger

F = TypeVar("F", bound=Callable)


def extract_token(header_name: str) -> str:
    token = request.headers.get(header_name, "").strip()
    if token:
        return token
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def current_user_id() -> int:
    return cast(int, g.user_id)


def auth_required(authorize: AuthorizeTokenUseCase, *, header_name: str = "auth") -> Callable[[F], F]:
    """Resolve the request's token to ``g.user_id`` before the view runs."""

    def decorator(f: F) -> F:
        @wraps(f)
        def inner(*a, **kw):
            token = extract_token(header_name)
            try:
                g.user_id = authorize.execute(token)
            except UnauthorizedError:
                logger.warning(f"Auth failed on {request.method} {request.path}")
                raise
            g.auth_token = token
            logger.debug(f"Auth OK: user={g.user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return cast(F, inner)

    return decorator


__all__ = ["auth_required", "current_user_id", "extract_token"]
