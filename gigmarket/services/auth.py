"""Auth boundary: resolve bearer tokens and run sign-in flows.

Token checks use the shared client's ``auth.get_user``, which does not
store a session.  Sign-in flows do store one, so they run on a fresh client
from ``create_auth_client()`` that is discarded after the call.
"""

from __future__ import annotations

import logging

from gigmarket.core.config import settings
from gigmarket.core.exceptions import AuthenticationError, InvalidInputError
from gigmarket.db.supabase import create_auth_client, get_supabase
from gigmarket.models.session import AuthTokens, SessionContext

logger = logging.getLogger(__name__)

SUPPORTED_OAUTH_PROVIDERS: frozenset[str] = frozenset({"google", "github"})


def resolve_session(token: str | None) -> SessionContext:
    """Validate *token* with the auth provider and return the caller."""
    if not token:
        raise AuthenticationError("Not authenticated")

    client = get_supabase()
    try:
        response = client.auth.get_user(token)
    except Exception as exc:
        logger.warning("session_rejected", extra={"error_message": str(exc)})
        raise AuthenticationError("Invalid or expired session") from exc

    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Invalid or expired session")

    return SessionContext(user_id=str(user.id), email=user.email, access_token=token)


def sign_in_with_password(email: str, password: str) -> AuthTokens:
    client = create_auth_client()
    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as exc:
        logger.info("password_login_failed", extra={"email": email})
        raise AuthenticationError("Invalid email or password") from exc

    session = response.session
    if session is None or response.user is None:
        raise AuthenticationError("Invalid email or password")

    logger.info("password_login", extra={"user_id": str(response.user.id)})
    return AuthTokens(
        user_id=str(response.user.id),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


def oauth_url(provider: str) -> str:
    """Return the provider URL that starts an OAuth sign-in."""
    if provider not in SUPPORTED_OAUTH_PROVIDERS:
        raise InvalidInputError(f"Unsupported OAuth provider: {provider}")

    credentials: dict = {"provider": provider}
    if settings.OAUTH_REDIRECT_URL:
        credentials["options"] = {"redirect_to": settings.OAUTH_REDIRECT_URL}

    client = create_auth_client()
    response = client.auth.sign_in_with_oauth(credentials)
    return response.url
