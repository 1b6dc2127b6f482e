# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from filegate.application.services.path_resolver import PathResolver
from filegate.domain.storage.entities import DirectoryListing, FileData
from filegate.domain.storage.ports import StoragePort


class GetPathContentUseCase:
    def __init__(self, *, paths: PathResolver, storage: StoragePort) -> None:
        self._paths = paths
        self._storage = storage

    def execute(self, user_id: int, relative_path: str) -> DirectoryListing | FileData:
        target = self._paths.resolve(user_id, relative_path)
        self._storage.ensure_directory(self._paths.root_of(user_id))

        if self._storage.is_directory(target):
            names = tuple(self._storage.list_dir(target))
            return DirectoryListing(names=names)
        return self._storage.read_file(target)
