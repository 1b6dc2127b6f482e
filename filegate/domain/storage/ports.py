# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import FileData, SandboxPath


class UploadedFile(Protocol):
    """Structural match for ``werkzeug.datastructures.FileStorage``."""

    filename: str | None

    def save(self, dst: str) -> None: ...


class StoragePort(Protocol):
    def ensure_directory(self, path: SandboxPath) -> None: ...
    def is_directory(self, path: SandboxPath) -> bool: ...
    def list_dir(self, path: SandboxPath) -> Sequence[str]: ...
    def read_file(self, path: SandboxPath) -> FileData: ...
    def make_dir(self, path: SandboxPath) -> None: ...
    def save_upload(self, directory: SandboxPath, upload: UploadedFile) -> SandboxPath: ...
    def remove(self, path: SandboxPath) -> None: ...
