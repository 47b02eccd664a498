from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # WebSocket settings
    WS_PATH: str = "/ws"
    WS_SEND_TIMEOUT_SECONDS: float = 5.0

    # CORS settings
    CORS_ALLOW_ORIGINS: list[str] = ["http://localhost:3000"]
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST"]
    CORS_ALLOW_HEADERS: list[str] = ["Content-Type", "Authorization"]

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    # Paths to exclude from access logs (e.g., /metrics, /health)
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]

    @field_validator("WS_SEND_TIMEOUT_SECONDS")
    @classmethod
    def validate_send_timeout(cls, v: float) -> float:
        """Reject timeouts that would make every send fail or block forever."""
        if v <= 0:
            raise ValueError("WS_SEND_TIMEOUT_SECONDS must be greater than 0")
        return v

    @field_validator("WS_PATH")
    @classmethod
    def validate_ws_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("WS_PATH must start with '/'")
        return v


app_settings = Settings()
