"""Pydantic models for the auth boundary."""

from pydantic import BaseModel


class SessionContext(BaseModel):
    """The authenticated caller, resolved once per request."""
    user_id: str
    email: str | None = None
    access_token: str


class PasswordLogin(BaseModel):
    email: str
    password: str


class AuthTokens(BaseModel):
    user_id: str
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None


class OAuthRedirect(BaseModel):
    provider: str
    url: str
