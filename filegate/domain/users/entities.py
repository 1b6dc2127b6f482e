# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    login: str
    password_hash: str
    created_at: datetime
    session_ids: tuple[int, ...] = field(default=())


@dataclass(slots=True, frozen=True)
class Session:

    id: int
    user_id: int
    token: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    issued_at: datetime
    expires_at: datetime
