from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "Generic Repository API"
    APP_DESCRIPTION: str = "CRUD web API over a generic repository (ORM or raw SQL backed)"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Database ---
    # Full connection string; when empty it is assembled from the DB_* parts below
    DB_URL: Optional[str] = None
    DB_DRIVER: str = "mysql+aiomysql"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "catalog_db"
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = False  # Create tables for registered models on startup

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"{self.DB_DRIVER}://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Repository implementation ---
    # False: ORM-backed repository (SQLModel session), True: raw parameterized SQL
    USE_RAW_SQL: bool = False

    # --- Logging ---
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # --- API route prefixes ---
    API_V1_PRODUCTS_PREFIX: str = "/api/v1/products"
    API_V1_CATEGORIES_PREFIX: str = "/api/v1/categories"

    @property
    def DOCS_ENABLED(self) -> bool:
        return self.APP_ENV == "development"

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
