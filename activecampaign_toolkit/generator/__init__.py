"""
Client generation

This module turns endpoint tables into request-builder client types and
provides the typed ActiveCampaign client built on top of them.
"""

from .builder import GeneratedClient, generate_client
from .request import RequestBuilder
from .client import (
    ActiveCampaignBuilder,
    ActiveCampaignClient,
    init,
    init_http_client,
    find_and_delete_by_email,
    parse_created_contact,
)

__all__ = [
    "GeneratedClient",
    "generate_client",
    "RequestBuilder",
    "ActiveCampaignBuilder",
    "ActiveCampaignClient",
    "init",
    "init_http_client",
    "find_and_delete_by_email",
    "parse_created_contact",
]
