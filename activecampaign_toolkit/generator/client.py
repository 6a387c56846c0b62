"""
ActiveCampaign API client.

Wraps the request builders generated from the ActiveCampaign endpoint
table with domain-named methods. Every method returns the raw httpx
response; HTTP status codes are left for the caller to inspect, and only
transport failures raise.

https://developers.activecampaign.com/reference/overview
"""

import logging
from typing import Any

import httpx

from ..core.config import ApiConfig, load_config
from ..core.endpoints import ACTIVECAMPAIGN_ENDPOINTS
from ..core.models import Contact, ContactRequest, CreatedContact
from .builder import generate_client

logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "Api-Token"

ActiveCampaignBuilder = generate_client("ActiveCampaignBuilder", ACTIVECAMPAIGN_ENDPOINTS)

ContactPayload = Contact | ContactRequest | str | bytes


def init_http_client(api_key: str, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """
    Create the shared HTTP client with the API token applied to every request.

    Args:
        api_key: ActiveCampaign API token
        transport: Optional httpx transport (used by tests)

    Returns:
        Configured httpx client
    """
    return httpx.Client(headers={API_TOKEN_HEADER: api_key}, transport=transport)


def _serialize_payload(payload: ContactPayload) -> str | bytes:
    if isinstance(payload, Contact):
        return payload.to_request()
    if isinstance(payload, ContactRequest):
        return payload.to_json()
    return payload


class ActiveCampaignClient:
    """
    Typed facade over the generated ActiveCampaign request builders.

    Example:
        >>> with ActiveCampaignClient.from_env() as client:
        ...     response = client.find_contact_by_email("luke@skywalker.com")
        ...     print(response.status_code)
    """

    def __init__(self, builder: ActiveCampaignBuilder, owns_http_client: bool = False):
        """
        Initialize the client.

        Args:
            builder: Generated request builder for the ActiveCampaign endpoints
            owns_http_client: Close the builder's httpx client in close()
        """
        self.builder = builder
        self._owns_http_client = owns_http_client

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "ActiveCampaignClient":
        """
        Build a client from explicit configuration.

        Args:
            config: Base URL and API key
            transport: Optional httpx transport (used by tests)
        """
        http_client = init_http_client(config.api_key, transport=transport)
        builder = ActiveCampaignBuilder(config.base_url, http_client)
        return cls(builder, owns_http_client=True)

    @classmethod
    def from_env(cls) -> "ActiveCampaignClient":
        """
        Build a client from ACTIVECAMPAIGN_API_BASE_URL and ACTIVECAMPAIGN_API_KEY.

        Raises:
            ConfigError: If either variable is missing or malformed
        """
        return cls.from_config(load_config())

    def close(self) -> None:
        """Close the shared HTTP client if this client created it."""
        self.builder.close()
        if self._owns_http_client:
            self.builder.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ===== CONTACTS METHODS =====

    def list_contacts(self) -> httpx.Response:
        """https://developers.activecampaign.com/reference/list-all-contacts"""
        return self.builder.contact_search().send()

    def find_contact_by_email(self, email: str) -> httpx.Response:
        """Search contacts by exact email address."""
        return self.builder.contact_search().query([("email", email)]).send()

    def find_contact_by_id(self, contact_id: str) -> httpx.Response:
        """https://developers.activecampaign.com/reference/get-contact"""
        return self.builder.contact_get(contact_id).send()

    def create_contact(self, payload: ContactPayload) -> httpx.Response:
        """
        Create a new contact.

        https://developers.activecampaign.com/reference/create-a-new-contact

        Args:
            payload: A Contact, a ContactRequest envelope, or an already
                serialized JSON body
        """
        return self.builder.contact_create().body(_serialize_payload(payload)).send()

    def delete_contact(self, contact_id: str) -> httpx.Response:
        """https://developers.activecampaign.com/reference/delete-contact"""
        return self.builder.contact_delete(contact_id).send()

    def sync_contact(self, payload: ContactPayload) -> httpx.Response:
        """
        Create a contact, or update the one with the same email.

        https://developers.activecampaign.com/reference/sync-a-contacts-data
        """
        return self.builder.contact_sync().body(_serialize_payload(payload)).send()


def init() -> ActiveCampaignClient:
    """Create a client configured from the environment."""
    return ActiveCampaignClient.from_env()


def _first_contact_id(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    contacts = data.get("contacts")
    if not isinstance(contacts, list) or not contacts or not isinstance(contacts[0], dict):
        return None
    contact_id = contacts[0].get("id")
    if isinstance(contact_id, bool):
        return None
    if isinstance(contact_id, (str, int)):
        return str(contact_id)
    return None


def find_and_delete_by_email(client: ActiveCampaignClient, email: str) -> bool:
    """
    Delete the first contact matching an email, if there is one.

    A failed search or a missing contact is logged and treated as done,
    not as an error.

    Args:
        client: ActiveCampaign client
        email: Email address to search for

    Returns:
        True if a delete request was issued, False otherwise

    Raises:
        httpx.RequestError: On transport failures
    """
    response = client.find_contact_by_email(email)

    if response.status_code != httpx.codes.OK:
        logger.warning(f"Contact search failed: {response.status_code}")
        logger.warning(response.text)
        return False

    try:
        data = response.json()
    except ValueError:
        data = None

    contact_id = _first_contact_id(data)
    if contact_id is None:
        logger.info(f"{email} could not be found")
        return False

    client.delete_contact(contact_id)
    logger.info(f"{email} was deleted!")
    return True


def parse_created_contact(response: httpx.Response) -> CreatedContact | None:
    """
    Extract the new contact's id from a create response.

    Returns:
        CreatedContact, or None if the body is not JSON or has no contact.id
    """
    try:
        data = response.json()
    except ValueError:
        return None

    if not isinstance(data, dict) or not isinstance(data.get("contact"), dict):
        return None

    contact_id = data["contact"].get("id")
    if isinstance(contact_id, bool) or not isinstance(contact_id, (str, int)):
        return None

    return CreatedContact(
        status=response.status_code,
        id=str(contact_id),
        raw_body=response.text,
    )
