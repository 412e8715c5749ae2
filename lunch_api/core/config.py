import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from lunch_api.core.constants import AuthConfig, EnvironmentConfig, LoggingConfig

# Load environment variables from a .env file
load_dotenv()


class Settings(BaseModel):
    """Deployment configuration handed to ``create_app``.

    Built once from the environment; the token service, database engine and
    error handlers receive it explicitly instead of reading ``os.environ``.
    """

    environment: str = Field(EnvironmentConfig.DEVELOPMENT, description="development, testing or production")
    database_url: str = "sqlite:///./whats_for_lunch.db"
    jwt_secret: str = "change-this-secret"
    jwt_algorithm: str = AuthConfig.ALGORITHM
    jwt_expiry_minutes: int = Field(AuthConfig.DEFAULT_EXPIRE_MINUTES, gt=0)
    client_origin: str = "http://localhost:3000"
    log_level: str = LoggingConfig.DEFAULT_LOG_LEVEL

    @field_validator('environment')
    def validate_environment(cls, v):
        v = v.strip().lower()
        if v not in EnvironmentConfig.ALL:
            raise ValueError(f"environment must be one of {EnvironmentConfig.ALL}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentConfig.PRODUCTION

    @classmethod
    def from_env(cls) -> "Settings":
        values = {
            "environment": os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV"),
            "database_url": os.getenv("DATABASE_URL"),
            "jwt_secret": os.getenv("JWT_SECRET"),
            "jwt_expiry_minutes": os.getenv("JWT_EXPIRY_MINUTES"),
            "client_origin": os.getenv("CLIENT_ORIGIN"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        # Unset variables fall back to the field defaults
        return cls(**{key: value for key, value in values.items() if value})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
