from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer


class LoginRequestDTO(BaseModel):
    login: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)


class LoginResponseDTO(BaseModel):
    token: str
    expires_at: datetime

    @field_serializer("expires_at")
    def _format_expires_at(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M:%S")


class ResultDTO(BaseModel):
    result: str = "ok"
