import os
from typing import Optional, List, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings"""

    # App settings
    APP_NAME: str = "Creator Match API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 7001

    # Creator store (LanceDB)
    CREATOR_DB_PATH: Optional[str] = None
    CREATOR_TABLE_NAME: str = "creators"
    MAX_POOL_SIZE: int = 500

    # Match store (SQLAlchemy URL; SQLite or PostgreSQL)
    MATCH_DATABASE_URL: Optional[str] = None

    # API settings
    API_V1_PREFIX: str = "/v1"
    DEFAULT_MATCH_LIMIT: int = 12
    MAX_MATCH_LIMIT: int = 100

    # Scoring policy
    ENGAGEMENT_TARGET_RATE: float = 0.04
    TOPIC_BOOST_STEP: float = 0.1
    TOPIC_BOOST_CAP: float = 0.2
    PRIORITY_BOOST_STEP: float = 0.025
    PRIORITY_BOOST_CAP: float = 0.05
    REASON_LIMIT: int = 3
    SCORING_CONCURRENCY: int = 8
    STRICT_TOPIC_VOCABULARY: bool = False
    TOPIC_VOCABULARY: Union[str, List[str]] = []

    # CORS settings
    ALLOWED_ORIGINS: Union[str, List[str]] = ["*"]

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_origins(cls, v):
        """Parse ALLOWED_ORIGINS from string or list"""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('TOPIC_VOCABULARY', mode='before')
    @classmethod
    def parse_vocabulary(cls, v):
        """Parse TOPIC_VOCABULARY from a comma separated string"""
        if isinstance(v, str):
            return [topic.strip().lower() for topic in v.split(",") if topic.strip()]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


def _project_root() -> str:
    current_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.dirname(current_dir)


def _resolve_default_creator_db_path() -> str:
    """Prefer an explicit env root, fall back to the repo-local data directory."""
    env_root = os.getenv("CREATOR_DB_ROOT")
    if env_root:
        return os.path.join(env_root, "lancedb")
    return os.path.join(_project_root(), "data", "lancedb")


def _resolve_default_match_database_url() -> str:
    url = (os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url
    return "sqlite:///" + os.path.join(_project_root(), "data", "matches.db")


# Set default store locations if not provided
if not settings.CREATOR_DB_PATH:
    settings.CREATOR_DB_PATH = _resolve_default_creator_db_path()

if not settings.MATCH_DATABASE_URL:
    settings.MATCH_DATABASE_URL = _resolve_default_match_database_url()
