"""Configuration loading for the ActiveCampaign API client."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import httpx
from dotenv import find_dotenv, load_dotenv

from .models import ConfigError

logger = logging.getLogger(__name__)

ENV_API_BASE_URL = "ACTIVECAMPAIGN_API_BASE_URL"
ENV_API_KEY = "ACTIVECAMPAIGN_API_KEY"


def load_env_var(name: str) -> str:
    """
    Look up a required environment variable.

    Args:
        name: Variable name

    Returns:
        The variable's value

    Raises:
        ConfigError: If the variable is unset or empty
    """
    value = os.environ.get(name)
    if not value:
        raise ConfigError(f"missing required env variable: {name}")
    return value


def _is_header_safe(value: str) -> bool:
    # Visible ASCII only; whitespace and control characters are rejected
    return all(0x21 <= ord(ch) <= 0x7E for ch in value)


@dataclass(frozen=True)
class ApiConfig:
    """
    Connection settings for the ActiveCampaign API.

    Attributes:
        base_url: Account API URL, e.g. https://youraccount.api-us1.com/api/3
        api_key: API token sent in the Api-Token header
    """
    base_url: str
    api_key: str

    def validate(self) -> "ApiConfig":
        """
        Check that both values are usable.

        Returns:
            self, for chaining

        Raises:
            ConfigError: If the base URL or API key is malformed
        """
        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise ConfigError(f"{ENV_API_BASE_URL} is not a valid URL: {e}")

        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigError(
                f"{ENV_API_BASE_URL} must be an absolute http(s) URL, got '{self.base_url}'"
            )

        if not self.api_key or not _is_header_safe(self.api_key):
            raise ConfigError(f"{ENV_API_KEY} is not a valid header value")

        return self


def load_config(dotenv_path: str | Path | None = None) -> ApiConfig:
    """
    Load and validate API configuration from the environment.

    A ``.env`` file is read first (from ``dotenv_path`` or the nearest one
    to the working directory). Variables already present in the
    environment take precedence over the file.

    Args:
        dotenv_path: Optional explicit path to a .env file

    Returns:
        Validated ApiConfig

    Raises:
        ConfigError: If a required variable is missing or malformed
    """
    path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)
    if path and load_dotenv(path, override=False):
        logger.debug(f"Loaded environment from {path}")

    config = ApiConfig(
        base_url=load_env_var(ENV_API_BASE_URL),
        api_key=load_env_var(ENV_API_KEY),
    )
    return config.validate()
