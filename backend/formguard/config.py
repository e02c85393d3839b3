"""Engine configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """FormGuard settings loaded from FORMGUARD_* environment variables."""

    # DOM attribute contract
    SELECTOR_ATTRIBUTE: str = "data-selector"
    ERROR_REF_ATTRIBUTE: str = "data-error-ref"
    ERROR_MESSAGE_PREFIX: str = "data-error-"

    # Error markup
    ERROR_CLASS: str = "error"
    ERROR_LIST_CLASS: str = "error_list"
    ERROR_ITEM_CLASS: str = "error_list__item"
    ERROR_REF_PREFIX: str = "error-"

    # Repeated messages on one field are collapsed to their first occurrence
    DEDUPLICATE_ERRORS: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    MAX_DOCUMENT_BYTES: int = 1_000_000

    model_config = {"env_prefix": "FORMGUARD_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
