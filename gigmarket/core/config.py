"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Storage buckets
    AVATAR_BUCKET: str = "avatars"
    RESUME_BUCKET: str = "resumes"

    # Auth
    OAUTH_REDIRECT_URL: str = ""

    # Wallet JSON-RPC
    ETH_RPC_URL: str = "https://cloudflare-eth.com"
    WALLET_RPC_TIMEOUT_SECONDS: float = 10.0

    # Profiles
    DEFAULT_PROFILE_CREDITS: int = 100

    # Mining simulation
    MINING_TICK_SECONDS: float = 0.5

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
