from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


DEV_PORTAL_SECRET = "desarrollo-secret-key-change-in-prod"


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Club Portal API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend origins (CORS, auto-built below)
    # -------------------------------------------------
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (DB, Auth, Storage)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # Cookie carrying the Supabase access token for browser staff sessions
    STAFF_SESSION_COOKIE: str = "sb-access-token"

    # -------------------------------------------------
    # Player portal sessions (self-issued HS256 tokens)
    # -------------------------------------------------
    PLAYER_PORTAL_SECRET: str = Field(DEV_PORTAL_SECRET, env="PLAYER_PORTAL_SECRET")
    PLAYER_SESSION_COOKIE: str = "player_session"
    PLAYER_SESSION_DAYS: int = Field(7, description="Lifetime of a portal session in days")

    # -------------------------------------------------
    # Login throttling
    # -------------------------------------------------
    LOGIN_MAX_ATTEMPTS: int = Field(10, description="Login attempts allowed per window and client")
    LOGIN_WINDOW_SECONDS: int = Field(900, description="Login throttling window (default: 15 minutes)")

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    LOG_LEVEL: str = Field("INFO", description="Level name for the club logger (DEBUG, INFO, WARNING, ...)")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    {origin.rstrip("/") for origin in settings.FRONTEND_ORIGINS}
)
