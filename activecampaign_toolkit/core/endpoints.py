"""
Endpoint declaration tables.

A table maps resource names to their operations:

    {
        "contact": {
            "search": ("GET", "contacts"),
            "get": ("GET", "contacts/{}", [("id", str)]),
        }
    }

Each entry is ``(verb, url_template)`` or
``(verb, url_template, [(param_name, param_type), ...])``.
"""

import logging
from typing import Any

from .models import EndpointDeclaration, EndpointTableError, HttpMethod

logger = logging.getLogger(__name__)


# https://developers.activecampaign.com/reference/overview
ACTIVECAMPAIGN_ENDPOINTS: dict[str, dict[str, tuple]] = {
    "contact": {
        "search": ("GET", "contacts"),
        "get": ("GET", "contacts/{}", [("id", str)]),
        "delete": ("DELETE", "contacts/{}", [("id", str)]),
        "create": ("POST", "contacts"),
        "sync": ("POST", "contact/sync"),
    },
}


def _parse_parameters(where: str, raw: Any) -> tuple[tuple[str, type], ...]:
    parameters = []
    seen = set()
    for item in raw:
        if not (isinstance(item, (tuple, list)) and len(item) == 2):
            raise EndpointTableError(f"{where}: parameters must be (name, type) pairs")
        name, param_type = item
        if not isinstance(name, str) or not name.isidentifier():
            raise EndpointTableError(f"{where}: invalid parameter name {name!r}")
        if not isinstance(param_type, type):
            raise EndpointTableError(f"{where}: parameter '{name}' type must be a class")
        if name in seen:
            raise EndpointTableError(f"{where}: duplicate parameter '{name}'")
        seen.add(name)
        parameters.append((name, param_type))
    return tuple(parameters)


def parse_endpoint_table(table: dict[str, dict[str, tuple]]) -> list[EndpointDeclaration]:
    """
    Parse a nested endpoint table into declarations.

    Args:
        table: { resource: { method_name: (verb, template[, params]) } }

    Returns:
        List of EndpointDeclaration objects in table order

    Raises:
        EndpointTableError: If an entry is malformed, uses an unknown verb,
            or two entries generate the same method name
    """
    declarations: list[EndpointDeclaration] = []
    method_names: set[str] = set()

    for resource, methods in table.items():
        if not isinstance(resource, str) or not resource.isidentifier():
            raise EndpointTableError(f"Invalid resource name {resource!r}")
        if not isinstance(methods, dict) or not methods:
            raise EndpointTableError(f"Resource '{resource}' must declare at least one method")

        for name, entry in methods.items():
            where = f"{resource}.{name}"
            if not isinstance(name, str) or not name.isidentifier():
                raise EndpointTableError(f"Invalid method name {where!r}")
            if not isinstance(entry, (tuple, list)) or len(entry) not in (2, 3):
                raise EndpointTableError(
                    f"{where}: entry must be (verb, template) or (verb, template, params)"
                )

            verb, template = entry[0], entry[1]
            try:
                http_method = HttpMethod(str(verb).upper())
            except ValueError:
                raise EndpointTableError(f"{where}: unknown HTTP verb {verb!r}")
            if not isinstance(template, str):
                raise EndpointTableError(f"{where}: URL template must be a string")

            parameters = _parse_parameters(where, entry[2]) if len(entry) == 3 else ()

            declaration = EndpointDeclaration(
                resource=resource,
                name=name,
                http_method=http_method,
                url_template=template.lstrip("/"),
                parameters=parameters,
            )

            # Placeholders must be satisfiable by the declared parameters
            try:
                declaration.resolve(["x"] * len(parameters))
            except (IndexError, KeyError, ValueError) as e:
                raise EndpointTableError(
                    f"{where}: template {template!r} does not match its parameters: {e}"
                )

            if declaration.method_name in method_names:
                raise EndpointTableError(
                    f"Duplicate generated method name '{declaration.method_name}'"
                )
            method_names.add(declaration.method_name)

            declarations.append(declaration)
            logger.debug(
                f"Declared endpoint: {declaration.method_name} "
                f"{http_method.value} {declaration.url_template}"
            )

    return declarations
