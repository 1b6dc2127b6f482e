# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Flask

from filegate.shared.errors import register_error_handler


def configure_error_handling(
    app: Flask, *, storage_root: Path | None = None, debug_mode: bool = False
) -> None:
    hidden: tuple[str, ...] = ()
    if storage_root is not None:
        # Longest first so the resolved root wins over a shorter textual form.
        hidden = tuple(
            sorted({str(storage_root), str(storage_root.resolve())}, key=len, reverse=True)
        )
    register_error_handler(app, hidden_prefixes=hidden, debug_mode=debug_mode)
