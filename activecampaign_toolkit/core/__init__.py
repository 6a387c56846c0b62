"""Core components for the ActiveCampaign toolkit."""

from .models import (
    HttpMethod,
    EndpointDeclaration,
    FieldValue,
    Contact,
    ContactRequest,
    CreatedContact,
    ConfigError,
    ContactFormatError,
    EndpointTableError,
    RequestAlreadySentError,
)
from .endpoints import ACTIVECAMPAIGN_ENDPOINTS, parse_endpoint_table
from .config import (
    ENV_API_BASE_URL,
    ENV_API_KEY,
    ApiConfig,
    load_env_var,
    load_config,
)

__all__ = [
    "HttpMethod",
    "EndpointDeclaration",
    "FieldValue",
    "Contact",
    "ContactRequest",
    "CreatedContact",
    "ConfigError",
    "ContactFormatError",
    "EndpointTableError",
    "RequestAlreadySentError",
    "ACTIVECAMPAIGN_ENDPOINTS",
    "parse_endpoint_table",
    "ENV_API_BASE_URL",
    "ENV_API_KEY",
    "ApiConfig",
    "load_env_var",
    "load_config",
]
