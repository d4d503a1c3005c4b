from typing import List, Literal
from pydantic_settings import BaseSettings
from pydantic import validator


class Settings(BaseSettings):
    PROJECT_NAME: str = "LawDesk API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Law firm back-office API: clients, cases, tasks, court dates, messaging and billing"
    API_PREFIX: str = "/api"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # React app development
        "http://localhost:5173",  # Vite dev server
    ]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Security
    JWT_SECRET: str = "lawfirm-secret-2024-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 7 * 24 * 60 * 60  # 7 days

    # Storage backend: memory, local (JSON file), cloud (Supabase) or sql
    STORAGE_BACKEND: Literal["memory", "local", "cloud", "sql"] = "sql"

    # Database
    DATABASE_URL: str = "sqlite:///./lawfirm.db"

    # Database connection pool settings (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    DB_COMMAND_TIMEOUT: int = 60  # 60 seconds
    SQL_ECHO: bool = False  # Set to True to log SQL queries (development only)

    # Local key-value file
    LOCAL_STORE_PATH: str = "lawfirm_store.json"
    LOCAL_LATENCY_MS: int = 50

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Seed data
    SEED_DEFAULT_USERS: bool = True
    DEFAULT_ADMIN_NAME: str = "Admin User"
    DEFAULT_ADMIN_EMAIL: str = "admin@lawfirm.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 100

    # Billing
    INVOICE_DUE_DAYS: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    # Performance
    ENABLE_RESPONSE_COMPRESSION: bool = True

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
