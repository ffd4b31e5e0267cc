"""
Driving School Admin Configuration
Pydantic v2 settings loaded from the environment and an optional .env file
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import json


class Settings(BaseSettings):
    """Application settings for the driving school admin core"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore"
    )

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Driving School Admin"
    VERSION: str = "1.0.0"

    # Development/Debug Configuration
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # GraphQL backend
    GRAPHQL_ENDPOINT: str = "http://localhost:4000/graphql"
    # No timeout unless explicitly configured
    GRAPHQL_TIMEOUT_SECONDS: Optional[float] = None
    GRAPHQL_AUTH_TOKEN: Optional[str] = None

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert ALLOWED_ORIGINS (JSON array or comma-separated) to a list"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, str):
                origins = [o.strip() for o in origins.split(",") if o.strip()]
        except ValueError:
            origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Session planning look-ahead for multi-day courses
    SESSION_PLANNING_HORIZON_DAYS: int = 365

    CURRENCY: str = "INR"


settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return Settings()
