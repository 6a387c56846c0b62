"""
Builder module for generating API client types from endpoint tables.

``generate_client`` turns a declarative endpoint table into a class with
one request-builder method per endpoint, named ``{resource}_{method}``.
Each generated method takes the endpoint's declared path parameters and
returns an unsent RequestBuilder bound to the endpoint's verb and resolved
URL.
"""

import inspect
import logging
from typing import Any, Callable

import httpx

from ..core.endpoints import parse_endpoint_table
from ..core.models import EndpointDeclaration, EndpointTableError
from .request import RequestBuilder

logger = logging.getLogger(__name__)


class GeneratedClient:
    """
    Base class for generated clients.

    Holds the API base URL and one shared httpx client. Subclasses are
    created by ``generate_client`` and carry the generated methods.
    """

    endpoints: tuple[EndpointDeclaration, ...] = ()

    def __init__(self, base_url: str, http_client: httpx.Client | None = None):
        """
        Initialize the client.

        Args:
            base_url: Base URL prefixed to every endpoint path
            http_client: Optional httpx client (created if None)
        """
        self.base_url = base_url

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client()
        else:
            self.http_client = http_client

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _build_url(self, path: str) -> str:
        """
        Build full URL from base URL and path.

        Args:
            path: Resolved endpoint path (e.g., "contacts/42")

        Returns:
            Full URL
        """
        base_url = self.base_url.rstrip("/")
        return f"{base_url}/{path}"

    def _request(self, declaration: EndpointDeclaration, values: list[Any]) -> RequestBuilder:
        url = self._build_url(declaration.resolve(values))
        return RequestBuilder(self.http_client, declaration.http_method, url)


def _make_endpoint_method(declaration: EndpointDeclaration, class_name: str) -> Callable:
    """Create the request-builder method for one declaration."""
    signature = inspect.Signature(
        [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [
            inspect.Parameter(name, inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=param_type)
            for name, param_type in declaration.parameters
        ],
        return_annotation=RequestBuilder,
    )

    def endpoint_method(*args, **kwargs) -> RequestBuilder:
        bound = signature.bind(*args, **kwargs)
        self = bound.arguments["self"]

        values = []
        for name, param_type in declaration.parameters:
            value = bound.arguments[name]
            if not isinstance(value, param_type):
                raise TypeError(
                    f"{declaration.method_name}() argument '{name}' must be "
                    f"{param_type.__name__}, not {type(value).__name__}"
                )
            values.append(value)

        return self._request(declaration, values)

    endpoint_method.__name__ = declaration.method_name
    endpoint_method.__qualname__ = f"{class_name}.{declaration.method_name}"
    endpoint_method.__signature__ = signature
    endpoint_method.__doc__ = (
        f"Build a {declaration.http_method.value} request to '{declaration.url_template}'."
    )
    return endpoint_method


def generate_client(class_name: str, table: dict[str, dict[str, tuple]]) -> type:
    """
    Generate a client class from an endpoint table.

    Args:
        class_name: Name of the generated class
        table: Endpoint table (see ``core.endpoints``)

    Returns:
        A GeneratedClient subclass with one method per declared endpoint

    Raises:
        EndpointTableError: If the table is malformed

    Example:
        >>> Api = generate_client("Api", {"user": {"get": ("GET", "users/{}", [("id", str)])}})
        >>> Api("https://api.example.com").user_get("7").url
        'https://api.example.com/users/7'
    """
    declarations = parse_endpoint_table(table)

    namespace: dict[str, Any] = {
        "endpoints": tuple(declarations),
        "__doc__": f"Generated client for {len(declarations)} endpoint(s).",
    }
    for declaration in declarations:
        if hasattr(GeneratedClient, declaration.method_name):
            raise EndpointTableError(
                f"Generated method name '{declaration.method_name}' shadows a client attribute"
            )
        namespace[declaration.method_name] = _make_endpoint_method(declaration, class_name)

    client_type = type(class_name, (GeneratedClient,), namespace)
    logger.debug(f"Generated {class_name} with {len(declarations)} endpoint methods")
    return client_type
