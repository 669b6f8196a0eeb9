import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from app.models.scoring_settings import ScoringSettings
from app.utils.exceptions import ConfigurationError

load_dotenv()

MONGO_DETAILS = os.getenv("MONGO_DETAILS", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "job_board_db")

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    val = raw.strip().lower()
    if val in TRUTHY:
        return True
    if val in FALSY:
        return False
    raise ConfigurationError(f"{key} must be a boolean", config_key=key, config_value=raw)


def env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer", config_key=key, config_value=raw, cause=e)


def page_size_limits():
    """(default, maximum) page size for ranked listings."""
    default = env_int("DEFAULT_PAGE_SIZE", 10)
    maximum = env_int("MAX_PAGE_SIZE", 50)
    if default < 1 or maximum < default:
        raise ConfigurationError(
            "DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE",
            config_key="DEFAULT_PAGE_SIZE", config_value=default,
        )
    return default, maximum


@lru_cache(maxsize=1)
def get_scoring_settings() -> ScoringSettings:
    try:
        return ScoringSettings(include_description=env_bool("MATCH_INCLUDE_DESCRIPTION", True))
    except PydanticValidationError as e:
        raise ConfigurationError("Invalid scoring settings", cause=e)
