"""
Configuration management for Quill backend
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./quill.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # Auth
    auth_provider: str = "none"  # 'none', 'jwt'
    auth_config: dict = {}
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8089
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    sql_echo: bool = False
    log_level: str = "INFO"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    class Config:
        env_file = ".env"
        env_prefix = "QUILL_"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_async_database_url(db_url: str) -> str:
    """Map a plain database URL onto the async driver used by the engine."""
    if db_url.startswith("postgresql://"):
        return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if db_url.startswith("sqlite://"):
        return db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return db_url
