# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from filegate.shared.logging import logger

from .base import AppError


def _scrub(value: Any, prefixes: tuple[str, ...]) -> Any:
    if isinstance(value, str):
        for prefix in prefixes:
            value = value.replace(prefix, "")
        return value
    if isinstance(value, dict):
        return {key: _scrub(item, prefixes) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(item, prefixes) for item in value]
    return value


def _http_error_code(exc: HTTPException) -> str:
    name = exc.name or "http_error"
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def handle_app_error(
    error: AppError, *, hidden_prefixes: tuple[str, ...] = ()
) -> tuple[Response, HTTPStatus]:
    payload = error.to_dict()
    if hidden_prefixes:
        payload = _scrub(payload, hidden_prefixes)
    return jsonify(payload), error.status


def register_error_handler(
    app: Flask,
    *,
    hidden_prefixes: tuple[str, ...] = (),
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    """Render every failure as a JSON body; internal path prefixes never leave the process."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.info(
            f"Handled application error {exc.code} ({int(exc.status)}) "
            f"on {request.method} {request.path}"
        )
        return handle_app_error(exc, hidden_prefixes=hidden_prefixes)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        response = jsonify({"error": _http_error_code(exc)})
        return response, exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"user={user_id}, query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error"})
        return response, default_status
