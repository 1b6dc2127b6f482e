# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction scope shared by the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from filegate.shared.logging import logger


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], *, label: str = "db"
) -> Iterator[Session]:
    """Yield a session that commits on clean exit and rolls back on error.

    Every repository call opens its own scope, so the sweep that precedes a
    login and the insert of the new session are separate transactions.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning(f"{label}: rolled back after {type(exc).__name__}")
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]
