from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, computed_field

load_dotenv()

DEFAULT_AUTH_SECRET = "JWT_SECRET_KEY"


class Settings(BaseSettings):
    """Base settings for the application."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "NFC Door Control"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Administrative API for NFC door access control"
    HOST: str = "0.0.0.0"
    PORT: int = 3005
    CORS_ORIGINS: str = "*"  # comma separated

    DATABASE_URL: str = ""
    LOCAL_SQLITE_PATH: str = "sqlite+aiosqlite:///./door_control.db"

    # Operator auth
    LOCAL_AUTH_SECRET: str = DEFAULT_AUTH_SECRET
    LOCAL_AUTH_TOKEN_EXP_SECONDS: int = 86400
    SEED_ADMIN_USERNAME: str = "admin"
    SEED_ADMIN_PASSWORD: str = Field(
        default="",
        description="Password for the admin account created at startup (skipped when empty)",
    )

    # Access history
    HISTORY_PAGE_SIZE: int = 50
    RECORD_CLIENT_IP: bool = Field(
        default=False,
        description="Store the peer address of edge devices on access history rows",
    )

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """Resolve the database URL for the application.

        Priority:
        1. Explicit DATABASE_URL (Postgres, SQLite, etc.)
        2. Local SQLite fallback for development: LOCAL_SQLITE_PATH
        """
        if self.DATABASE_URL and self.DATABASE_URL.strip():
            return self.DATABASE_URL.strip()
        if self.LOCAL_SQLITE_PATH and self.LOCAL_SQLITE_PATH.strip():
            return self.LOCAL_SQLITE_PATH.strip()
        return "sqlite+aiosqlite:///./door_control.db"

    @property
    def uses_default_auth_secret(self) -> bool:
        return self.LOCAL_AUTH_SECRET == DEFAULT_AUTH_SECRET

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
