"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Natillera backend
    backend_api_base: str = "http://localhost:8000"

    # Service
    service_name: str = "natillera-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Display conventions (Colombian peso)
    currency_symbol: str = "$"
    currency_max_fraction_digits: int = 2
    currency_min_fraction_digits: int = 0
    system_actor_name: str = "Sistema"


settings = Settings()
