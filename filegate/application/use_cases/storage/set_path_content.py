# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from filegate.application.services.path_resolver import PathResolver
from filegate.domain.storage.entities import SandboxPath
from filegate.domain.storage.exceptions import DirectoryExistsError
from filegate.domain.storage.ports import StoragePort, UploadedFile
from filegate.shared.logging import logger


class SetPathContentUseCase:
    """Create the directory at ``relative_path`` and store any uploads in it.

    An already existing directory is only an error when nothing is uploaded:
    with at least one file the request is treated as "put these files there".
    """

    def __init__(self, *, paths: PathResolver, storage: StoragePort) -> None:
        self._paths = paths
        self._storage = storage

    def execute(
        self, user_id: int, relative_path: str, uploads: Sequence[UploadedFile] = ()
    ) -> list[SandboxPath]:
        target = self._paths.resolve(user_id, relative_path)
        self._storage.ensure_directory(self._paths.root_of(user_id))

        try:
            self._storage.make_dir(target)
        except DirectoryExistsError:
            if not uploads:
                raise
            logger.debug(f"storage.set: reusing existing directory {target.display}")

        saved = [self._storage.save_upload(target, upload) for upload in uploads]
        logger.info(
            f"storage.set: ok user_id={user_id} path={target.display} uploads={len(saved)}"
        )
        return saved
