"""
Application configuration settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"], case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field("Pincast Expo API", alias="APP_NAME")
    dashboard_base_url: str = Field(
        "https://expo.pincast.fm", alias="DASHBOARD_BASE_URL"
    )

    # Environment
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # Database
    database_url: str = Field(
        "sqlite+aiosqlite:///./pincast_expo.db", alias="DATABASE_URL"
    )
    debug_sql: bool = Field(False, alias="DATABASE_ECHO")

    # App tokens (signed by this service)
    jwt_secret_key: str = Field(
        "dev-secret-key-change-in-production", alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    app_token_expires_minutes: int = Field(60, alias="APP_TOKEN_EXPIRES_MINUTES")

    # Identity provider tokens. Without a JWKS URL, identity tokens are
    # verified with the shared secret above.
    identity_jwks_url: Optional[str] = Field(None, alias="IDENTITY_JWKS_URL")
    identity_issuer: Optional[str] = Field(None, alias="IDENTITY_ISSUER")
    identity_audience: Optional[str] = Field(None, alias="IDENTITY_AUDIENCE")
    jwks_cache_ttl_seconds: int = Field(3600, alias="JWKS_CACHE_TTL_SECONDS")
    jwks_fetch_timeout_seconds: float = Field(5.0, alias="JWKS_FETCH_TIMEOUT_SECONDS")

    # Catalog
    catalog_default_radius_meters: float = Field(
        50_000, alias="CATALOG_DEFAULT_RADIUS_METERS"
    )
    catalog_max_radius_meters: float = Field(200_000, alias="CATALOG_MAX_RADIUS_METERS")

    # Analytics: 0 disables the rolling aggregate cache
    analytics_refresh_interval_seconds: int = Field(
        900, alias="ANALYTICS_REFRESH_INTERVAL_SECONDS"
    )

    # CORS
    cors_origins: str = Field("*", alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(True, alias="CORS_ALLOW_CREDENTIALS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
