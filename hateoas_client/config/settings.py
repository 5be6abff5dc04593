from __future__ import annotations

from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
class HateoasSettings(BaseSettings):
    """
    Hypermedia client settings managed by Pydantic.
    Reads from HATEOAS_* environment variables and/or .env file.

    Values are meant to be set once at startup, before any response is
    transformed, and only read afterwards.
    """
    # Payload keys
    LINKS_KEY: str = "links"
    ACTIONS_KEY: str = "actions"
    PROPERTIES_KEY: str = "properties"

    # Query classification
    QUERY_CLASSES: list[str] = ["query", "__query"]
    QUERY_REL_MARKERS: list[str] = ["__query"]

    # Method config handed to the resource factory when resource() gets none,
    # e.g. {"update": {"method": "PUT"}}
    DEFAULT_HTTP_METHODS: Optional[dict[str, dict[str, Any]]] = None

    # Nesting guard for untrusted payloads
    MAX_DEPTH: int = 64

    LOG_LEVEL: str = "INFO"

    # Config to read from .env file if available
    model_config = SettingsConfigDict(
        env_prefix="HATEOAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
        )

    @field_validator("LINKS_KEY", "ACTIONS_KEY", "PROPERTIES_KEY")
    @classmethod
    def _non_empty_key(cls, value: str) -> str:
        if not value:
            raise ValueError("payload key names must be non-empty")
        return value

    @field_validator("MAX_DEPTH")
    @classmethod
    def _positive_depth(cls, value: int) -> int:
        if value < 1:
            raise ValueError("MAX_DEPTH must be at least 1")
        return value


settings = HateoasSettings()
