"""Main CLI entry point for the ActiveCampaign toolkit."""

import argparse
import logging
import sys

import httpx

from activecampaign_toolkit.core import (
    ACTIVECAMPAIGN_ENDPOINTS,
    Contact,
    FieldValue,
    ConfigError,
    parse_endpoint_table,
)
from activecampaign_toolkit.generator import (
    ActiveCampaignClient,
    find_and_delete_by_email,
)
from activecampaign_toolkit.generator.util import format_response_body
from activecampaign_toolkit.demo import run_demo, DemoError, DEMO_EMAIL

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def create_client() -> ActiveCampaignClient:
    """Create a client from the environment, exiting on configuration errors."""
    try:
        return ActiveCampaignClient.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print(
            "Set ACTIVECAMPAIGN_API_BASE_URL and ACTIVECAMPAIGN_API_KEY "
            "in the environment or a .env file.",
            file=sys.stderr,
        )
        sys.exit(1)


def print_response(response: httpx.Response) -> None:
    """Print status line and formatted body of a response."""
    print(f"HTTP {response.status_code}")
    body = format_response_body(response)
    if body:
        print(body)


def contact_from_args(args) -> Contact:
    """Build a Contact from create/sync command arguments."""
    field_values = None
    if args.field:
        field_values = []
        for pair in args.field:
            if "=" not in pair:
                print(f"Error: Invalid --field '{pair}'. Use FIELD=VALUE.", file=sys.stderr)
                sys.exit(1)
            key, value = pair.split("=", 1)
            field_values.append(FieldValue(field=key.strip(), value=value))

    return Contact(
        email=args.email,
        first_name=args.first_name,
        last_name=args.last_name,
        phone=args.phone,
        field_values=field_values,
    )


def cmd_endpoints(args):
    """Handle the endpoints command - show the generated endpoint methods."""
    declarations = parse_endpoint_table(ACTIVECAMPAIGN_ENDPOINTS)

    print(f"Endpoints ({len(declarations)}):")
    print()
    for decl in declarations:
        params = ", ".join(f"{name}: {t.__name__}" for name, t in decl.parameters)
        print(f"  {decl.method_name + '(' + params + ')':28s} {decl.http_method.value:6s} {decl.url_template}")


def cmd_list(args):
    """Handle the list command."""
    with create_client() as client:
        print_response(client.list_contacts())


def cmd_find(args):
    """Handle the find command."""
    with create_client() as client:
        print_response(client.find_contact_by_email(args.email))


def cmd_get(args):
    """Handle the get command."""
    with create_client() as client:
        print_response(client.find_contact_by_id(args.id))


def cmd_create(args):
    """Handle the create command."""
    contact = contact_from_args(args)
    with create_client() as client:
        print_response(client.create_contact(contact))


def cmd_sync(args):
    """Handle the sync command."""
    contact = contact_from_args(args)
    with create_client() as client:
        print_response(client.sync_contact(contact))


def cmd_delete(args):
    """Handle the delete command."""
    with create_client() as client:
        print_response(client.delete_contact(args.id))


def cmd_purge(args):
    """Handle the purge command - find a contact by email and delete it."""
    with create_client() as client:
        if find_and_delete_by_email(client, args.email):
            print(f"✓ Deleted {args.email}")
        else:
            print(f"Nothing deleted for {args.email}")


def cmd_demo(args):
    """Handle the demo command - create, sync and fetch a contact."""
    with create_client() as client:
        try:
            run_demo(client, email=args.email)
        except DemoError as e:
            print(f"Demo failed: {e}", file=sys.stderr)
            sys.exit(1)


def add_contact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--email", required=True, help="Contact email address")
    parser.add_argument("--first-name", help="First name")
    parser.add_argument("--last-name", help="Last name")
    parser.add_argument("--phone", help="Phone number")
    parser.add_argument(
        "--field",
        action="append",
        metavar="FIELD=VALUE",
        help="Custom field value (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="activecampaign",
        description="ActiveCampaign contacts CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    endpoints_parser = subparsers.add_parser("endpoints", help="Show the generated endpoint methods")
    endpoints_parser.set_defaults(func=cmd_endpoints)

    list_parser = subparsers.add_parser("list", help="List contacts")
    list_parser.set_defaults(func=cmd_list)

    find_parser = subparsers.add_parser("find", help="Find contacts by email")
    find_parser.add_argument("--email", required=True, help="Email address")
    find_parser.set_defaults(func=cmd_find)

    get_parser = subparsers.add_parser("get", help="Get a contact by id")
    get_parser.add_argument("--id", required=True, help="Contact id")
    get_parser.set_defaults(func=cmd_get)

    create_parser = subparsers.add_parser("create", help="Create a contact")
    add_contact_arguments(create_parser)
    create_parser.set_defaults(func=cmd_create)

    sync_parser = subparsers.add_parser("sync", help="Create or update a contact by email")
    add_contact_arguments(sync_parser)
    sync_parser.set_defaults(func=cmd_sync)

    delete_parser = subparsers.add_parser("delete", help="Delete a contact by id")
    delete_parser.add_argument("--id", required=True, help="Contact id")
    delete_parser.set_defaults(func=cmd_delete)

    purge_parser = subparsers.add_parser("purge", help="Find a contact by email and delete it")
    purge_parser.add_argument("--email", required=True, help="Email address")
    purge_parser.set_defaults(func=cmd_purge)

    demo_parser = subparsers.add_parser("demo", help="Run the create/sync/fetch walkthrough")
    demo_parser.add_argument("--email", default=DEMO_EMAIL, help=f"Demo email (default: {DEMO_EMAIL})")
    demo_parser.set_defaults(func=cmd_demo)

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except httpx.RequestError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
