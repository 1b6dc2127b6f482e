# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.shared.errors.base import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)


class SandboxEscapeError(ForbiddenError):
    default_code = "path_outside_sandbox"


class PathNotFoundError(NotFoundError):
    default_code = "path_not_found"

    def __init__(self, path: str, *, expected: str | None = None) -> None:
        context: dict[str, str] = {"path": path}
        if expected:
            context["expected"] = expected
        super().__init__(context=context)


class DirectoryExistsError(ConflictError):
    default_code = "directory_exists"

    def __init__(self, path: str) -> None:
        super().__init__(context={"path": path})


class RootDeletionError(InvalidRequestError):
    default_code = "root_deletion_forbidden"


class BadUploadError(BadRequestError):
    default_code = "upload_failed"

    def __init__(self, filename: str | None, reason: str) -> None:
        super().__init__(context={"filename": filename or "", "reason": reason})
