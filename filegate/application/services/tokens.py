# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-bound access tokens."""

from __future__ import annotations

from datetime import UTC, datetime

from jose import jwt
from jose.exceptions import JOSEError

from filegate.domain.users.entities import TokenClaims
from filegate.domain.users.exceptions import InvalidTokenError
from filegate.shared.clock import Clock, utc_now


class TokenService:
    """Issues and verifies HS256 JWTs shaped ``{iat, exp, data: {userId}}``.

    Expiry is judged against the injected clock rather than the library's own
    wall-clock check, so a token issued at ``t0`` with lifetime ``L`` is valid
    for ``t0 <= now < t0 + L`` and nothing else.
    """

    def __init__(self, secret: str, *, algorithm: str = "HS256", clock: Clock = utc_now) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int, lifetime_seconds: int, *, now: datetime | None = None) -> str:
        issued_at = int((now or self._clock()).timestamp())
        payload = {
            "iat": issued_at,
            "exp": issued_at + int(lifetime_seconds),
            "data": {"userId": user_id},
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JOSEError as exc:
            raise InvalidTokenError("invalid") from exc

        exp = claims.get("exp")
        iat = claims.get("iat")
        data = claims.get("data")
        if (
            not isinstance(exp, int)
            or not isinstance(iat, int)
            or not isinstance(data, dict)
            or not isinstance(data.get("userId"), int)
        ):
            raise InvalidTokenError("malformed")

        if self._clock().timestamp() >= exp:
            raise InvalidTokenError("expired")

        return TokenClaims(
            user_id=data["userId"],
            issued_at=datetime.fromtimestamp(iat, UTC),
            expires_at=datetime.fromtimestamp(exp, UTC),
        )


__all__ = ["TokenService"]
