# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Replace a user's password and revoke every session they hold."""

from __future__ import annotations

import argparse
import sys

from filegate.infrastructure.container import Container
from filegate.shared.config import AppConfig, load_config
from filegate.shared.errors import AppError
from filegate.shared.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Change a filegate user's password")
    parser.add_argument("login", help="Existing login")
    parser.add_argument("password", help="New plain-text password")
    return parser


def main(argv: list[str] | None = None, *, config: AppConfig | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = config or load_config()
    setup_logging(config.log_level, log_file=config.log_file)

    container = Container(config)
    container.init_db()

    try:
        container.change_password_use_case.execute(args.login, args.password)
    except AppError as exc:
        print(f"Error: {exc.code} {dict(exc.context or {})}", file=sys.stderr)
        return 1

    print(f"Password changed for '{args.login}'; existing tokens revoked")
    return 0


if __name__ == "__main__":
    sys.exit(main())
