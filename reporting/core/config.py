from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "cloud-reporting"
    version: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    APP_DATABASE_DSN: str = "sqlite:////tmp/reporting.db"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Thanos / Prometheus querier used to collect facts upstream
    PROMETHEUS_URL: str = "http://localhost:9090"
    THANOS_ALLOW_PARTIAL_RESPONSES: bool = False


settings = Settings()
