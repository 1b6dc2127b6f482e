# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SandboxPath:
    """An absolute path already proven to live under ``root``.

    ``display`` is the caller-facing form, relative to the user's root, and is
    the only variant that may appear in responses or error contexts.
    """

    root: str
    absolute: str

    @property
    def display(self) -> str:
        relative = self.absolute[len(self.root):]
        return relative or "/"

    @property
    def name(self) -> str:
        return self.absolute.rsplit("/", 1)[-1]

    @property
    def is_root(self) -> bool:
        return os.path.normcase(self.absolute) == os.path.normcase(self.root)

    def child(self, name: str) -> SandboxPath:
        return SandboxPath(root=self.root, absolute=f"{self.absolute.rstrip('/')}/{name}")


@dataclass(slots=True, frozen=True)
class FileData:

    mime_type: str
    size: int
    name: str
    content: bytes


@dataclass(slots=True, frozen=True)
class DirectoryListing:

    names: tuple[str, ...]

    def joined(self) -> str:
        return " ".join(self.names)
