# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Mapping of user-supplied relative paths onto per-user sandbox roots."""

from __future__ import annotations

import os
import re
from pathlib import Path

from filegate.domain.storage.entities import SandboxPath
from filegate.domain.storage.exceptions import SandboxEscapeError
from filegate.shared.logging import logger

_SEPARATORS = re.compile(r"[\\/]+")


def join_path(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")


def normalize_path(path: str) -> str:
    """Collapse ``.`` and ``..`` lexically; ``..`` at the top is absorbed."""
    stack: list[str] = []
    for part in _SEPARATORS.split(path):
        if part in ("", "."):
            continue
        if part == "..":
            if stack:
                stack.pop()
        else:
            stack.append(part)
    return "/" + "/".join(stack)


def is_pure_ascent(path: str) -> bool:
    """True for paths made of nothing but ``..`` (and ignorable) segments."""
    return all(part in ("", ".", "..") for part in _SEPARATORS.split(path))


class PathResolver:
    def __init__(self, storage_root: str | Path) -> None:
        self._storage_root = normalize_path(os.path.abspath(str(storage_root)))

    @property
    def storage_root(self) -> str:
        return self._storage_root

    def user_root(self, user_id: int) -> str:
        return normalize_path(join_path(self._storage_root, str(user_id)))

    def resolve(self, user_id: int, relative_path: str) -> SandboxPath:
        root = self.user_root(user_id)
        if is_pure_ascent(relative_path or ""):
            # "..", "../.." and friends pop to an empty stack: the caller's root.
            return SandboxPath(root=root, absolute=root)

        candidate = normalize_path(join_path(root, relative_path))

        # Canonicalisation is lexical only; containment is decided here.
        if candidate != root and not candidate.startswith(root + "/"):
            logger.warning(f"paths.resolve: sandbox escape rejected user_id={user_id}")
            raise SandboxEscapeError()

        return SandboxPath(root=root, absolute=candidate)

    def root_of(self, user_id: int) -> SandboxPath:
        root = self.user_root(user_id)
        return SandboxPath(root=root, absolute=root)


__all__ = ["PathResolver", "is_pure_ascent", "join_path", "normalize_path"]
