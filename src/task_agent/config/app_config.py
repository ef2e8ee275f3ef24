# main app settings/configs
import os
from pathlib import Path
from typing import Literal
from functools import lru_cache
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from task_agent.config.settings_mixins import (
    OpenAISettingsMixin,
    PineconeSettingsMixin,
    TaskLoopSettingsMixin,
)
from task_agent.common.errors import ConfigurationError
from task_agent.common.logging.logger import logger

# Determine which environment we're in. Default to 'dev'.
APP_ENV = os.getenv("APP_ENV", "dev")

# .env file lives at the project root: src/task_agent/config/ -> three levels up
# NOTE: the .env file names must match the APP_ENV config, e.g. .env.dev
SERVICE_ROOT = Path(__file__).resolve().parents[3]
env_file_path = SERVICE_ROOT / f".env.{APP_ENV}"

class DefaultSettings(BaseSettings):
    """
    The baseline, default settings that govern common functionalities.
    Passed in last to set low priority (allows overrides).
    """
    model_config = SettingsConfigDict(env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = APP_ENV
    LOG_LEVEL: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        # accept "debug" as well as "DEBUG"
        return value.upper() if isinstance(value, str) else value

class ServiceSettings(
    OpenAISettingsMixin,
    PineconeSettingsMixin,
    TaskLoopSettingsMixin,
    DefaultSettings # passed in last to set low priority
):
    """
    The main service settings.
    Read once at startup from the process environment, then the .env.{APP_ENV} file.
    """
    model_config = SettingsConfigDict(
        env_file=env_file_path, env_file_encoding="utf-8", extra="ignore"
    )

def load_service_settings(**overrides) -> ServiceSettings:
    """
    Build settings, converting pydantic's validation failure into a ConfigurationError
    that names every missing or invalid variable.
    """
    try:
        return ServiceSettings(**overrides) # type: ignore[arg-type]
    except ValidationError as e:
        missing = [str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"]
        invalid = [f"{err['loc'][0]} ({err['msg']})" for err in e.errors() if err["type"] != "missing"]
        parts = []
        if missing:
            parts.append(f"missing environment variable(s): {', '.join(missing)}")
        if invalid:
            parts.append(f"invalid environment variable(s): {', '.join(invalid)}")
        raise ConfigurationError("; ".join(parts), missing=missing) from e

# use lru cache to return a cached instance of service settings
@lru_cache()
def get_service_settings() -> ServiceSettings:
    settings = load_service_settings()
    logger.info(f"APP_ENV: {settings.APP_ENV}")
    return settings
