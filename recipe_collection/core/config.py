from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Recipe Collection API"
    ROOT_PATH: str = ""
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    SECRET_KEY: str = "your-super-secret-key"  # Default for dev, override in prod
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    ALGORITHM: str = "HS256"
    LOGIN_RATE_LIMIT: str = "10/minute"

    # Database
    DATABASE_URL: str = "sqlite:///./recipes.db"

    # Sharing
    PUBLIC_BASE_URL: str = "http://localhost:5173"
    SITE_NAME: str = "myrecipecollection.app"

    # Logging
    LOGGING_CONFIG: str = "logging.ini"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000"
    ]

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

settings = Settings()
