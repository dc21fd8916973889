"""Authentication models for Firebase identities and ID tokens."""

from __future__ import annotations

from pydantic import BaseModel


class Identity(BaseModel):
    """A signed-in caller as reported by the authentication service."""

    uid: str
    email: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None


class UserInfo(BaseModel):
    id: str | None = None
    email: str | None = None
