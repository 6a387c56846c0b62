"""
End-to-End Demo

Walks a contact through create, sync and fetch against a live
ActiveCampaign account, then removes it again.
"""

import logging

import httpx

from .core import Contact
from .generator import ActiveCampaignClient, find_and_delete_by_email, parse_created_contact
from .generator.util import format_response_body

logger = logging.getLogger(__name__)

# Suppress httpx INFO logs for cleaner output
logging.getLogger("httpx").setLevel(logging.WARNING)

DEMO_EMAIL = "luke@skywalker.com"


class DemoError(Exception):
    """Raised when a demo step does not produce the expected result."""
    pass


def run_demo(client: ActiveCampaignClient, email: str = DEMO_EMAIL) -> Contact:
    """
    Run the create -> sync -> fetch walkthrough.

    Steps:
    1. Remove any existing contact with the demo email
    2. Create the contact with first name "Luke"
    3. Sync the contact as "Anakin Skywalker"
    4. Fetch it by id and check the synced names
    5. Delete it again

    Args:
        client: ActiveCampaign client
        email: Email address used for the demo contact

    Returns:
        The contact as fetched after the sync

    Raises:
        DemoError: If a step returns an unexpected result
        httpx.RequestError: On transport failures
    """
    print(f"Starting demo for '{email}'...")
    print()

    # Step 1: Clean up leftovers from earlier runs
    print("Step 1: Removing existing contact...")
    if find_and_delete_by_email(client, email):
        print("✓ Removed existing contact")
    else:
        print("✓ Nothing to remove")
    print()

    # Step 2: Create
    print("Step 2: Creating contact...")
    response = client.create_contact(Contact(email=email, first_name="Luke"))
    if response.status_code != httpx.codes.CREATED:
        print(f"✗ Create failed: HTTP {response.status_code}")
        print(format_response_body(response))
        raise DemoError(f"Create returned HTTP {response.status_code}")

    created = parse_created_contact(response)
    if created is None:
        raise DemoError("Create response did not include contact.id")
    print(f"✓ Created contact {created.id}")
    print()

    try:
        # Step 3: Sync
        print("Step 3: Syncing contact...")
        response = client.sync_contact(
            Contact(email=email, first_name="Anakin", last_name="Skywalker")
        )
        if not response.is_success:
            raise DemoError(f"Sync returned HTTP {response.status_code}")
        print("✓ Synced contact")
        print()

        # Step 4: Fetch and verify
        print("Step 4: Fetching contact...")
        response = client.find_contact_by_id(created.id)
        if response.status_code != httpx.codes.OK:
            raise DemoError(f"Fetch returned HTTP {response.status_code}")

        try:
            contact = Contact.from_dict(response.json().get("contact"))
        except (ValueError, AttributeError) as e:
            raise DemoError(f"Fetch returned an unreadable contact: {e}") from e

        if contact.first_name != "Anakin" or contact.last_name != "Skywalker":
            raise DemoError(
                f"Expected Anakin Skywalker, got {contact.first_name} {contact.last_name}"
            )
        print(f"✓ Fetched {contact.first_name} {contact.last_name} <{contact.email}>")
        print()

    finally:
        # Step 5: Clean up
        print("Step 5: Deleting contact...")
        client.delete_contact(created.id)
        print("✓ Deleted contact")
        print()

    print("=" * 50)
    print("✓ Demo completed successfully!")
    print("=" * 50)
    return contact
