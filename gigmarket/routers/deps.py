"""Shared FastAPI dependencies.

``require_session`` resolves the bearer token into a ``SessionContext`` and
makes sure the caller has a profile row; ``optional_session`` does the token
check only when a token was sent.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gigmarket.models.session import SessionContext
from gigmarket.services.auth import resolve_session
from gigmarket.services.profiles import ensure_profile

bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def require_session(credentials: Credentials) -> SessionContext:
    token = credentials.credentials if credentials else None
    session = resolve_session(token)
    ensure_profile(session.user_id)
    return session


def optional_session(credentials: Credentials) -> SessionContext | None:
    if credentials is None:
        return None
    return resolve_session(credentials.credentials)


CurrentSession = Annotated[SessionContext, Depends(require_session)]
OptionalSession = Annotated[SessionContext | None, Depends(optional_session)]
