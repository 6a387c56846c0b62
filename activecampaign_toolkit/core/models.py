"""Core data models for the ActiveCampaign toolkit."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class HttpMethod(Enum):
    """HTTP verb bound to an endpoint declaration."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class EndpointDeclaration:
    """
    Static description of one API operation.

    The URL template may use positional (``contacts/{}``) or named
    (``contacts/{id}``) placeholders. Values are substituted in the order
    the parameters are declared.
    """
    resource: str
    name: str
    http_method: HttpMethod
    url_template: str
    parameters: tuple[tuple[str, type], ...] = ()

    @property
    def method_name(self) -> str:
        """Name of the generated request-builder method."""
        return f"{self.resource}_{self.name}"

    @property
    def parameter_names(self) -> list[str]:
        return [name for name, _ in self.parameters]

    def resolve(self, values: list[Any]) -> str:
        """
        Substitute parameter values into the URL template.

        Values are inserted as-is; no URL-encoding is applied.

        Args:
            values: Parameter values in declaration order

        Returns:
            The resolved path, relative to the client's base URL
        """
        if len(values) != len(self.parameters):
            raise ValueError(
                f"{self.method_name} expects {len(self.parameters)} parameter(s), "
                f"got {len(values)}"
            )
        named = dict(zip(self.parameter_names, values))
        return self.url_template.format(*values, **named)


@dataclass
class FieldValue:
    """A custom field value attached to a contact."""
    field: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "value": self.value}

    @classmethod
    def from_dict(cls, data: Any) -> "FieldValue":
        if not isinstance(data, dict):
            raise ContactFormatError(f"field value must be an object, got {type(data).__name__}")
        for key in ("field", "value"):
            if not isinstance(data.get(key), str):
                raise ContactFormatError(f"field value is missing string '{key}'")
        return cls(field=data["field"], value=data["value"])


# Internal attribute name -> camelCase wire name for optional string fields
_OPTIONAL_CONTACT_FIELDS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "phone": "phone",
}


@dataclass
class Contact:
    """
    An ActiveCampaign contact record.

    ``email`` is mandatory. Optional fields set to None are left out of the
    serialized form, and missing or null optional fields are accepted when
    deserializing.
    """
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    field_values: list[FieldValue] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert Contact to its camelCase wire dictionary."""
        data: dict[str, Any] = {"email": self.email}
        for attr, wire_name in _OPTIONAL_CONTACT_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[wire_name] = value
        if self.field_values is not None:
            data["fieldValues"] = [fv.to_dict() for fv in self.field_values]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Contact":
        """
        Create Contact from a camelCase wire dictionary.

        Raises:
            ContactFormatError: If email is missing or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ContactFormatError(f"contact must be an object, got {type(data).__name__}")

        email = data.get("email")
        if not isinstance(email, str):
            raise ContactFormatError("contact is missing required string field 'email'")

        optional: dict[str, str | None] = {}
        for attr, wire_name in _OPTIONAL_CONTACT_FIELDS.items():
            value = data.get(wire_name)
            if value is not None and not isinstance(value, str):
                raise ContactFormatError(f"contact field '{wire_name}' must be a string")
            optional[attr] = value

        raw_field_values = data.get("fieldValues")
        field_values = None
        if raw_field_values is not None:
            if not isinstance(raw_field_values, list):
                raise ContactFormatError("contact field 'fieldValues' must be a list")
            field_values = [FieldValue.from_dict(item) for item in raw_field_values]

        return cls(email=email, field_values=field_values, **optional)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> "Contact":
        return cls.from_dict(_loads(text))

    def to_request(self) -> str:
        """Serialize this contact wrapped in the request envelope."""
        logger.debug(f"Generating request for {self.email}")
        return ContactRequest(contact=self).to_json()


@dataclass
class ContactRequest:
    """The ``{"contact": {...}}`` envelope used on the wire."""
    contact: Contact

    def to_dict(self) -> dict[str, Any]:
        return {"contact": self.contact.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "ContactRequest":
        if not isinstance(data, dict) or "contact" not in data:
            raise ContactFormatError("envelope is missing the 'contact' key")
        return cls(contact=Contact.from_dict(data["contact"]))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> "ContactRequest":
        return cls.from_dict(_loads(text))


@dataclass
class CreatedContact:
    """Fields extracted from a create-contact response."""
    status: int
    id: str
    raw_body: str = field(repr=False, default="")


def _loads(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ContactFormatError(f"invalid JSON: {e}") from e


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass


class ContactFormatError(ValueError):
    """Raised when a contact payload cannot be deserialized."""
    pass


class EndpointTableError(Exception):
    """Raised when an endpoint declaration table is malformed."""
    pass


class RequestAlreadySentError(Exception):
    """Raised when a request builder is sent more than once."""
    pass
