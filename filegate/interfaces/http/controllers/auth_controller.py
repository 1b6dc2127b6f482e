# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from filegate.application.use_cases.users.authorize_token import AuthorizeTokenUseCase
from filegate.application.use_cases.users.login_user import LoginUserUseCase
from filegate.application.use_cases.users.logout_user import LogoutUserUseCase
from filegate.interfaces.http.auth import auth_required
from filegate.interfaces.http.dto.auth import LoginRequestDTO, LoginResponseDTO, ResultDTO
from filegate.shared.errors.validation import raise_validation_error
from filegate.shared.logging import logger


def _request_payload() -> dict:
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        authorize_use_case: AuthorizeTokenUseCase,
        auth_header: str = "auth",
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._authorize_use_case = authorize_use_case
        self._auth_header = auth_header

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_request_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        session = self._login_use_case.execute(dto.login, dto.password)

        payload = LoginResponseDTO(token=session.token, expires_at=session.expires_at)
        logger.info(f"auth.login: issued session user_id={session.user_id}")
        return jsonify(payload.model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(g.auth_token)
        return jsonify(ResultDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        guard = auth_required(self._authorize_use_case, header_name=self._auth_header)
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=guard(self.logout), methods=["POST"])
        return bp
