# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class _KindError(AppError):
    """Error kind with a class-level default code and status."""

    default_code = "error"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code or cast(str, getattr(self, "default_code")),
            status=self.default_status,
            context=context,
        )


class BadRequestError(_KindError):
    default_code = "bad_request"
    default_status = HTTPStatus.BAD_REQUEST


class UnauthorizedError(_KindError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(_KindError):
    default_code = "forbidden"
    default_status = HTTPStatus.FORBIDDEN


class NotFoundError(_KindError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND


class ConflictError(_KindError):
    default_code = "conflict"
    default_status = HTTPStatus.CONFLICT


class InvalidRequestError(_KindError):
    default_code = "invalid_request"
    default_status = HTTPStatus.BAD_REQUEST


class ValidationError(BadRequestError):
    default_code = "validation_error"
