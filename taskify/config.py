"""Application configuration using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings, read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    HOST: str = Field(default="0.0.0.0", description="Interface the server binds to")
    PORT: int = Field(default=5000, description="Port the server listens on")

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    DATABASE_NAME: str = Field(default="taskify", description="Database holding the tasks collection")
    SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        description="How long the driver waits for a reachable server before failing",
    )

    # API
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    LOG_LEVEL: str = "INFO"
