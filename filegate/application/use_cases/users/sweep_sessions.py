# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opportunistic removal of expired sessions.

There is no background timer: login is the trigger, so an expired session of
an idle user stays in the table until somebody logs in. Such a row is harmless
because its token has expired as well.
"""

from __future__ import annotations

from datetime import datetime

from filegate.domain.users.repositories import SessionRepository
from filegate.shared.clock import Clock, utc_now
from filegate.shared.logging import logger


class SweepExpiredSessionsUseCase:
    def __init__(self, *, sessions: SessionRepository, clock: Clock = utc_now) -> None:
        self._sessions = sessions
        self._clock = clock

    def execute(self, now: datetime | None = None) -> int:
        removed = self._sessions.delete_expired(now or self._clock())
        if removed:
            logger.info(f"sessions.sweep: removed={removed}")
        return removed
