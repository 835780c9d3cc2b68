from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://localhost:5432/arqui_quotes"

    @field_validator('DATABASE_URL', mode='before')
    @classmethod
    def convert_database_url(cls, v: str) -> str:
        """Convert postgresql:// to postgresql+asyncpg:// for async support."""
        if v and v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return v

    # CORS
    FRONTEND_URL: str = "http://localhost:4200"

    # Quoting defaults
    DEFAULT_CURRENCY: str = "PEN"
    DEFAULT_UNCOVERED_PERCENT: float = 30.0

    @field_validator('DEFAULT_CURRENCY')
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("DEFAULT_CURRENCY must be a 3-letter code")
        return v

    @field_validator('DEFAULT_UNCOVERED_PERCENT')
    @classmethod
    def check_uncovered_percent(cls, v: float) -> float:
        if not 0 <= v <= 100:
            raise ValueError("DEFAULT_UNCOVERED_PERCENT must be between 0 and 100")
        return v

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    DOCS_ENABLED: bool = True
    LOG_LEVEL: str | None = None

    @field_validator('LOG_LEVEL')
    @classmethod
    def check_log_level(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def sqlalchemy_echo(self) -> bool:
        """Echo SQL only while debugging outside production."""
        return self.DEBUG and not self.is_production

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
