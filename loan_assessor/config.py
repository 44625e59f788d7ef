"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "loan-assessor"
    log_level: str = "INFO"

    # Batch processing
    batch_chunk_size: int = 10  # Rows per cooperative work unit

    # Mock provider clients
    simulate_provider_latency: bool = True
    provider_latency_min_ms: int = 500
    provider_latency_max_ms: int = 1500


settings = Settings()
