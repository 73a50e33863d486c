from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # OneAuto HPI provider; HPI_* names are the older variable names
    oneauto_api_key: str = Field(default="", validation_alias=AliasChoices("ONEAUTOAPI_API_KEY", "HPI_API_KEY"))
    oneauto_base_url: str = Field(default="", validation_alias=AliasChoices("ONEAUTOAPI_BASE_URL", "HPI_API_URL"))
    oneauto_hpi_path: str = Field(default="/v1/hpi", alias="ONEAUTOAPI_HPI_PATH")
    oneauto_auth_style: str = Field(default="x-api-key", alias="ONEAUTOAPI_AUTH_STYLE")
    oneauto_use_mock: bool = Field(default=False, alias="ONEAUTOAPI_USE_MOCK")
    oneauto_timeout_seconds: float = Field(default=15.0, alias="ONEAUTOAPI_TIMEOUT_SECONDS")
    oneauto_retries: int = Field(default=2, alias="ONEAUTOAPI_RETRIES")

    # Fixture data source, used when the live provider is not configured
    hpi_fixture_dir: str = Field(default="", alias="HPI_FIXTURE_DIR")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def live_provider_configured(self) -> bool:
        return bool(self.oneauto_api_key and self.oneauto_base_url)
