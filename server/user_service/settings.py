"""
User Service Settings

Configuration management using pydantic settings.
Loads from environment variables with USER_SERVICE_ prefix.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server configuration settings.
    
    Environment variables:
    - USER_SERVICE_API_KEY: Static key required in the X-API-Key header (default: secret123)
    - USER_SERVICE_HOST: Bind host for the CLI entry point (default: 0.0.0.0)
    - USER_SERVICE_PORT: Bind port for the CLI entry point (default: 8080)
    - USER_SERVICE_LOG_LEVEL: Root logging level (default: INFO)
    - USER_SERVICE_DEBUG: Enable debug mode (default: false)
    """
    
    model_config = SettingsConfigDict(
        env_prefix="USER_SERVICE_",
        env_file=".env",
        extra="ignore",
    )
    
    # Single static key, compared exactly against X-API-Key
    api_key: str = "secret123"
    
    host: str = "0.0.0.0"
    port: int = 8080
    
    log_level: str = "INFO"
    
    # Debug mode
    debug: bool = False


# Global settings instance
settings = Settings()
