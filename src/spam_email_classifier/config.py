"""Settings loaded from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .logger import set_level

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-3-sonnet-20240229"
API_VERSION = "2023-06-01"
MAX_TOKENS = 1000
HISTORY_SIZE = 10

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    api_key: Optional[str] = None
    use_ai: bool = False
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    timeout: float = Field(default=30.0, gt=0)
    local_delay: float = Field(default=0.0, ge=0)
    history_size: int = Field(default=HISTORY_SIZE, ge=1)
    log_level: str = "INFO"


# env var -> Settings field
_ENV_MAP = {
    "ANTHROPIC_API_KEY": "api_key",
    "SPAM_CLASSIFIER_USE_AI": "use_ai",
    "SPAM_CLASSIFIER_API_URL": "api_url",
    "SPAM_CLASSIFIER_MODEL": "model",
    "SPAM_CLASSIFIER_TIMEOUT": "timeout",
    "SPAM_CLASSIFIER_LOCAL_DELAY": "local_delay",
    "SPAM_CLASSIFIER_HISTORY_SIZE": "history_size",
    "SPAM_CLASSIFIER_LOG_LEVEL": "log_level",
}


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    values = {}
    for env_var, field in _ENV_MAP.items():
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        if field == "use_ai":
            values[field] = raw.strip().lower() in _TRUE_VALUES
        else:
            values[field] = raw.strip()

    try:
        settings = Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e

    set_level(settings.log_level)
    return settings
