from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Web Series API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False  # uvicorn reload only
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite:///./webseries.db"

    # JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Passwords
    BCRYPT_ROUNDS: int = 10

    # Accounts
    DEFAULT_MONTHLY_FEE: float = 14.99

    # Catalog
    FEATURED_LIMIT: int = 6
    CONTINUE_WATCHING_LIMIT: int = 10
    CONTINUE_WATCHING_THRESHOLD: int = 90  # percent; at or above counts as finished

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
