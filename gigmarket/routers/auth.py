"""Auth endpoints: password login, OAuth start, current session."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from gigmarket.models.profile import Profile
from gigmarket.models.session import AuthTokens, OAuthRedirect, PasswordLogin
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.auth import oauth_url, sign_in_with_password
from gigmarket.services.profiles import ensure_profile, get_profile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=AuthTokens)
async def login(payload: PasswordLogin) -> AuthTokens:
    """Sign in with email and password; creates the profile on first login."""
    tokens = sign_in_with_password(payload.email, payload.password)
    ensure_profile(tokens.user_id)
    return tokens


@router.get("/oauth/{provider}", response_model=OAuthRedirect)
async def oauth_start(provider: str) -> OAuthRedirect:
    """Return the URL the client should open to sign in with *provider*."""
    return OAuthRedirect(provider=provider, url=oauth_url(provider))


@router.get("/session", response_model=Profile)
async def current_session(session: CurrentSession) -> Profile:
    """Return the profile behind the bearer token."""
    return get_profile(session.user_id)
