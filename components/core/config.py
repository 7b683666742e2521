from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database settings
    DB_URL: Optional[str] = None  # Optional full DB URL
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "finance_tracker"
    CREATE_TABLES: bool = True

    # API settings
    API_VERSION: str = "v1"
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # Auth settings
    SECRET_KEY: str = "change-me"  # Override in .env for any real deployment
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60
    SESSION_COOKIE_NAME: str = "session"
    SESSION_COOKIE_SECURE: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = "logs"

    # Spending notifications, as fractions of the monthly limit
    SPENDING_WARNING_RATIO: float = 0.7
    SPENDING_DANGER_RATIO: float = 0.9
    LUXURY_SHARE_LIMIT: float = 0.3

    # Challenge settings
    SUGGESTION_LOOKBACK_DAYS: int = 30
    MAX_SUGGESTIONS: int = 3
    DEFAULT_CHALLENGE_DAYS: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def async_db_url(self) -> str:
        """Get asynchronous database URL."""
        if self.DB_URL:
            return self.DB_URL
        return f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()


settings = get_settings()
