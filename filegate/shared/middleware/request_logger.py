# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request access log lines and correlation ids."""

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from filegate.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_ALWAYS_MASKED = frozenset({"authorization", "cookie", "x-api-key"})


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _masked_headers(auth_header: str) -> dict[str, str]:
    masked = _ALWAYS_MASKED | {auth_header.lower()}
    return {
        key: _fingerprint(value) if key.lower() in masked else value
        for key, value in request.headers.items()
    }


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def configure_request_logging(
    app: Flask, *, debug_mode: bool = False, auth_header: str = "auth"
) -> None:
    """Log one line per request start and end, tagged with a correlation id.

    The id comes from ``X-Request-ID`` when the client sends one and is echoed
    back on the response. Token headers are logged as short hashes in debug mode
    and not at all otherwise.
    """

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"http.start: {request.method} {request.path} ip={_client_ip()} "
                f"length={request.content_length} headers={_masked_headers(auth_header)}"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        started = g.get("request_started", time.perf_counter())
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"http: {request.method} {request.path} status={response.status_code} "
            f"user={g.get('user_id')} bytes={response.content_length} "
            f"took={elapsed_ms:.1f}ms"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.error: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
