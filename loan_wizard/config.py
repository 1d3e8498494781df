"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Durable form-state slot
    database_url: str = "sqlite:///./loan_wizard.db"
    storage_key: str = "loan-application-data"

    # External Services
    loan_service_base: str = "http://localhost:3000"

    # Service
    service_name: str = "loan-wizard"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
