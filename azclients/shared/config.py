# azclients/shared/config.py
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from azclients import __version__


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.

    Every client accepts explicit keyword overrides, so these values are
    only the process-wide defaults.
    """

    # --- Application Meta ---
    APP_NAME: str = "azclients"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "azclients"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Transport ---
    HTTP_TIMEOUT: float = 30.0
    ACCEPT_LANGUAGE: str = "en-US"

    # --- Azure Resource Manager (Microsoft.Features) ---
    ARM_ENDPOINT: str = "https://management.azure.com"
    FEATURES_API_VERSION: str = "2015-12-01"

    # --- IoT Hub service API ---
    IOTHUB_API_VERSION: str = "2020-03-13"
    # The registry rejects bulk requests above this many devices
    BULK_OPERATION_LIMIT: int = 100
    DEFAULT_TWIN_QUERY: str = "select * from devices"

    @property
    def USER_AGENT(self) -> str:
        return f"{self.APP_NAME}/{__version__}"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
