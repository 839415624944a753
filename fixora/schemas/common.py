"""Shared response envelopes and validation helpers."""

from __future__ import annotations

from pydantic import BaseModel


def clean_text(v: str, label: str, min_len: int = 1, max_len: int | None = None) -> str:
    """Strip *v* and enforce length bounds, raising ``ValueError`` with a readable message."""
    v = v.strip()
    if len(v) < min_len:
        if min_len == 1:
            raise ValueError(f"{label} is required")
        raise ValueError(f"{label} must be at least {min_len} characters")
    if max_len is not None and len(v) > max_len:
        raise ValueError(f"{label} cannot exceed {max_len} characters")
    return v


def normalise_email(v: str) -> str:
    v = v.strip().lower()
    local, _, domain = v.partition("@")
    if not local or "." not in domain or " " in v:
        raise ValueError("Valid email is required")
    return v


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    db: bool
