"""Salted password hashes for stored user credentials."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from filegate.domain.users.repositories import PasswordHasher

DEFAULT_METHOD = "scrypt"


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self._method, salt_length=self._salt_length)

    def verify(self, password: str, hashed: str) -> bool:
        # Rows created outside the CLI may carry no hash at all.
        if not hashed:
            return False
        return check_password_hash(hashed, password)
