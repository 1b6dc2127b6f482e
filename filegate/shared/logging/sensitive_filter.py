# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials that may end up in log messages."""

from __future__ import annotations

import re

_REDACTED = "***REDACTED***"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Compact JWTs anywhere in the text
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)[\w.-]{20,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"((?:jwt[_-]?)?secret\s*[:=]\s*['\"]?)[^\s'\"]{4,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)[\w.-]{20,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(passw(?:or)?d\s*[:=]\s*['\"]?)[^\s'\"]+", re.IGNORECASE), rf"\1{_REDACTED}"),
    # Credentials embedded in DATABASE_URL
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{_REDACTED}@"),
    # Raw auth header dumps
    (re.compile(r"((?:authorization|auth)\s*:\s*['\"]?)[^\s'\"]{10,}", re.IGNORECASE), rf"\1{_REDACTED}"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message"]
