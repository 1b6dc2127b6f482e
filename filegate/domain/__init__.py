# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .storage.entities import DirectoryListing, FileData, SandboxPath
from .users.entities import Session, TokenClaims, User

__all__ = [
    "DirectoryListing",
    "FileData",
    "SandboxPath",
    "Session",
    "TokenClaims",
    "User",
]
