"""Pydantic schemas for session tokens."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Role = Literal["user", "admin"]


class TokenIdentity(BaseModel):
    """The identity recovered from a verified session token."""

    user_id: int
    email: str
    role: Role

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
