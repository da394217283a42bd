from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "zenith_e2e"
    mongodb_timeout_ms: int = 5000

    # Services under test
    backend_url: str = "http://localhost:8080"
    frontend_url: str = "http://localhost:3000"
    # Sent as the Origin header on every backend call; must match the backend's CORS allow-list.
    frontend_origin: str = "http://localhost:3000"
    http_timeout_seconds: float = 30.0

    # Bootstrap pacing
    warmup_delay_seconds: float = 0.5
    registration_delay_seconds: float = 0.5
    isolated_registration_delay_seconds: float = 0.3
    register_retry_delay_seconds: float = 1.0
    admin_retry_delay_seconds: float = 1.5
    register_max_attempts: int = 3
    admin_max_attempts: int = 4

    # wait-for-services
    wait_timeout_seconds: float = Field(
        default=120, validation_alias=AliasChoices("timeout", "wait_timeout_seconds")
    )
    poll_interval_seconds: float = Field(
        default=2, validation_alias=AliasChoices("poll_interval", "poll_interval_seconds")
    )

    # Teardown
    cleanup_after_tests: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


settings = Settings()
