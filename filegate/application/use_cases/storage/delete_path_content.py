# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.application.services.path_resolver import PathResolver
from filegate.domain.storage.exceptions import RootDeletionError
from filegate.domain.storage.ports import StoragePort
from filegate.shared.logging import logger


class DeletePathContentUseCase:
    def __init__(self, *, paths: PathResolver, storage: StoragePort) -> None:
        self._paths = paths
        self._storage = storage

    def execute(self, user_id: int, relative_path: str) -> None:
        target = self._paths.resolve(user_id, relative_path)
        if target.is_root:
            raise RootDeletionError()

        self._storage.remove(target)
        logger.info(f"storage.rm: ok user_id={user_id} path={target.display}")
