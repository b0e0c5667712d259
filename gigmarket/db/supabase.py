"""Supabase client helpers.

``get_supabase()`` returns a lazily-initialized, process-wide client used for
table and storage access.  ``create_auth_client()`` returns a fresh client for
sign-in flows, so a user's auth session is never stored on the shared client.
"""

from supabase import Client, create_client

from gigmarket.core.config import settings

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def create_auth_client() -> Client:
    """Return a new, unshared Supabase client for per-request auth calls."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
