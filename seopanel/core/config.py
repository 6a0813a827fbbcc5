"""Application configuration"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Database
    database_url: str = "postgresql+asyncpg://localhost:5432/seopanel"
    database_url_sync: str = "postgresql://localhost:5432/seopanel"

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Security
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    default_site_id: str = "altiorainfotech"
    site_base_url: str = "http://localhost:3000"

    # Cache Settings
    cache_backend: str = "memory"  # "memory" or "redis"
    seo_cache_ttl_seconds: int = 1800
    cache_key_prefix: str = "seo"

    # Redirect Settings
    max_redirect_chain_depth: int = 5
    redirect_delete_limit: int = 50

    # Bulk operation caps (per role)
    bulk_limit_owner: int = 200
    bulk_limit_admin: int = 100
    bulk_limit_editor: int = 25
    bulk_limit_viewer: int = 0

    # Content Structure Settings
    meta_title_soft_limit: int = 60
    meta_description_soft_limit: int = 160
    max_meta_title_length: int = 120
    max_meta_description_length: int = 320
    max_slug_length: int = 100

    # Performance monitoring
    slow_operation_threshold_ms: float = 500.0
    performance_history_size: int = 1000

    # Optional override for sitemap URLs (falls back to request host)
    sitemap_base_url: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
