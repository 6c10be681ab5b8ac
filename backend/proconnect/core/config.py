"""
Configuration settings for the application.
"""
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load environment variables from the backend/.env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.info(f"[ENV] Loaded .env from: {env_path}")
else:
    logger.debug(f"[ENV] No .env file at {env_path}, using process environment")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # API configuration
    API_PORT: int = Field(default=5000)
    API_HOST: str = Field(default="0.0.0.0")
    API_PREFIX: str = Field(default="/api")
    LOG_LEVEL: str = Field(default="INFO")

    # Database configuration
    DB_HOST: str = Field(default="localhost")
    DB_PORT: str = Field(default="5432")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="postgres")
    DB_NAME: str = Field(default="proconnect")

    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # CORS configuration
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*")

    # Session tokens
    SESSION_EXPIRATION_MINUTES: int = Field(default=60 * 24 * 30)  # 30 days
    RESET_TOKEN_EXPIRATION_MINUTES: int = Field(default=10)

    # Outgoing email
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = Field(default=587)
    SMTP_EMAIL: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    FROM_EMAIL: str = Field(default="noreply@proconnect.local")
    FROM_NAME: str = Field(default="ProConnect")

    # Frontend URL used in emailed links
    FRONTEND_URL: str = Field(default="http://localhost:3000")

    # Connection graph and feed behaviour
    SUGGESTION_LIMIT: int = Field(default=10)
    FEED_HIDE_PRIVATE_CONNECTION_POSTS: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DATABASE_URL", mode="before")
    def assemble_database_url(cls, v: Optional[str], info: Any) -> str:
        """
        Assemble the async database URL if not provided, and make sure a
        provided PostgreSQL URL uses the asyncpg driver.
        """
        if v:
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            return v

        values = info.data
        user = values.get("DB_USER")
        password = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")

        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """
        Parse a comma-separated string into a list of CORS origins.
        """
        if isinstance(v, str) and v != "*":
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def sync_database_url(self) -> str:
        """Database URL with a synchronous driver, used by Alembic and scripts."""
        return self.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://", 1)


# Create settings object
settings = Settings()
