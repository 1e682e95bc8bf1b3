from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application Configuration
    app_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    frontend_dist_dir: str = "./dist"

    # Google OAuth Configuration
    google_client_id: str = ""
    google_client_secret: str = ""
    google_auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_userinfo_url: str = "https://www.googleapis.com/oauth2/v1/userinfo"

    # Session Configuration
    session_secret: str = "goal-tracker-secret"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "goal_tracker_session"
    session_max_age_days: int = 30
    session_cookie_secure: bool = True
    session_cookie_samesite: str = "none"

    # Database Configuration
    database_url: str = "sqlite:///./goals.db"

    # Upload Configuration
    upload_dir: str = "./uploads"
    max_upload_size_mb: int = 10
    allowed_upload_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/heic",
        "image/heif",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def oauth_redirect_uri(self) -> str:
        """Callback URL registered with the identity provider."""
        return f"{self.app_url.rstrip('/')}/api/auth/google/callback"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
