"""
Configuration management for the Products REST API
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Products REST API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = ""  # e.g. "WARNING"; empty follows DEBUG

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Database
    DATABASE_URL: str = "sqlite:///./products.db"

    # Only origin allowed to make cross-origin requests
    FRONTEND_URL: str = "http://localhost:5173"

    # Interactive API documentation
    DOCS_URL: str = "/docs"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
