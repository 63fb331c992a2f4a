"""
Router configuration via pydantic-settings.

Values passed to the constructor win; anything omitted is read from
``JSONAPI_ROUTER_*`` environment variables.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV_PREFIX = "JSONAPI_ROUTER_"


def is_absolute_url(value: str) -> bool:
    """True when *value* has both a scheme and a host."""
    parts = urlsplit(value)
    return bool(parts.scheme and parts.netloc)


class RouterSettings(BaseSettings):
    """
    Root configuration of a :class:`~jsonapi_router.router.Router`.

    Attributes:
        base_url: Absolute URL every produced URL is resolved against,
            e.g. ``"https://api.example.com/v1"``. Read from
            ``JSONAPI_ROUTER_BASE_URL`` when not given.
    """

    model_config = SettingsConfigDict(
        env_prefix=DEFAULT_ENV_PREFIX, frozen=True, extra="ignore"
    )

    base_url: str

    @field_validator("base_url")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        value = value.strip()
        if not is_absolute_url(value):
            raise ValueError("base_url must be an absolute URL with scheme and host")
        return value

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX) -> RouterSettings:
        """Load settings from ``<prefix>BASE_URL`` and friends."""
        return cls(_env_prefix=prefix)
