# Configuration management

from pydantic_settings import BaseSettings  # type: ignore
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # Catalog database
    database_url: str = "sqlite:///./docrel.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    # Namespace for unqualified target table names
    default_schema: Optional[str] = None

    # Inference policy
    always_with_primary_key: bool = False
    default_string_width: int = 128

    # Application
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = True

    # Observability
    metrics_enabled: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "DOCREL_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
