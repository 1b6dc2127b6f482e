# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Local filesystem adapter.

Every method takes a :class:`SandboxPath`, so containment has been checked by
the resolver before any syscall happens here.
"""

from __future__ import annotations

import mimetypes
import os
import shutil
from pathlib import Path

from filegate.domain.storage.entities import FileData, SandboxPath
from filegate.domain.storage.exceptions import (
    BadUploadError,
    DirectoryExistsError,
    PathNotFoundError,
)
from filegate.domain.storage.ports import StoragePort, UploadedFile
from filegate.shared.logging import logger

DEFAULT_MIME_TYPE = "application/octet-stream"


def is_safe_basename(name: str) -> bool:
    """Allow only simple filenames (no directories)."""
    if not name or name in (".", ".."):
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name == Path(name).name


def guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name, strict=False)
    return mime_type or DEFAULT_MIME_TYPE


class LocalFileStorage(StoragePort):
    def ensure_directory(self, path: SandboxPath) -> None:
        Path(path.absolute).mkdir(parents=True, exist_ok=True)

    def is_directory(self, path: SandboxPath) -> bool:
        return os.path.isdir(path.absolute)

    def list_dir(self, path: SandboxPath) -> list[str]:
        if not os.path.isdir(path.absolute):
            raise PathNotFoundError(path.display, expected="directory")
        names = sorted(os.listdir(path.absolute))
        logger.debug(f"storage: list path={path.absolute} entries={len(names)}")
        return names

    def read_file(self, path: SandboxPath) -> FileData:
        file_path = Path(path.absolute)
        if not file_path.is_file():
            raise PathNotFoundError(path.display, expected="file")
        content = file_path.read_bytes()
        logger.debug(f"storage: read path={file_path} size={len(content)}")
        return FileData(
            mime_type=guess_mime_type(file_path.name),
            size=len(content),
            name=file_path.name,
            content=content,
        )

    def make_dir(self, path: SandboxPath) -> None:
        dir_path = Path(path.absolute.rstrip("/") or "/")
        if os.path.lexists(dir_path):
            raise DirectoryExistsError(path.display)
        dir_path.mkdir(parents=True)
        logger.debug(f"storage: mkdir path={dir_path}")

    def save_upload(self, directory: SandboxPath, upload: UploadedFile) -> SandboxPath:
        filename = upload.filename or ""
        if not is_safe_basename(filename):
            raise BadUploadError(filename, "invalid_filename")

        target = directory.child(filename)
        try:
            upload.save(target.absolute)
        except OSError as exc:
            logger.warning(
                f"storage: upload failed path={target.display} error={type(exc).__name__}"
            )
            raise BadUploadError(filename, "write_failed") from exc

        logger.debug(f"storage: write path={target.absolute}")
        return target

    def remove(self, path: SandboxPath) -> None:
        target = Path(path.absolute)
        if not os.path.lexists(target):
            raise PathNotFoundError(path.display)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
        logger.debug(f"storage: rm path={target}")


__all__ = ["DEFAULT_MIME_TYPE", "LocalFileStorage", "guess_mime_type", "is_safe_basename"]
