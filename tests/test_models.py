"""Tests for core data models."""

import json
import pytest

from activecampaign_toolkit.core.models import (
    HttpMethod,
    EndpointDeclaration,
    FieldValue,
    Contact,
    ContactRequest,
    CreatedContact,
    ContactFormatError,
)


@pytest.fixture
def full_contact():
    """A contact with every field populated."""
    return Contact(
        email="johndoe@example.com",
        first_name="John",
        last_name="Doe",
        phone="7223224241",
        field_values=[
            FieldValue(field="1", value="The Value for First Field"),
            FieldValue(field="6", value="2008-01-20"),
        ],
    )


def test_http_method_enum():
    """Test HttpMethod enum values."""
    assert HttpMethod.GET.value == "GET"
    assert HttpMethod.DELETE.value == "DELETE"
    assert HttpMethod("POST") == HttpMethod.POST


def test_endpoint_declaration_method_name():
    """Test generated method name is resource_name."""
    decl = EndpointDeclaration(
        resource="contact",
        name="delete",
        http_method=HttpMethod.DELETE,
        url_template="contacts/{}",
        parameters=(("id", str),),
    )

    assert decl.method_name == "contact_delete"
    assert decl.parameter_names == ["id"]


def test_endpoint_declaration_resolve_positional():
    """Test positional placeholders are filled in declaration order."""
    decl = EndpointDeclaration(
        resource="list",
        name="member",
        http_method=HttpMethod.GET,
        url_template="lists/{}/members/{}",
        parameters=(("list_id", str), ("member_id", str)),
    )

    assert decl.resolve(["7", "42"]) == "lists/7/members/42"


def test_endpoint_declaration_resolve_named():
    """Test named placeholders are filled by parameter name."""
    decl = EndpointDeclaration(
        resource="list",
        name="member",
        http_method=HttpMethod.GET,
        url_template="lists/{member_id}/of/{list_id}",
        parameters=(("list_id", str), ("member_id", str)),
    )

    assert decl.resolve(["7", "42"]) == "lists/42/of/7"


def test_endpoint_declaration_resolve_does_not_escape():
    """Test values are inserted without URL-encoding."""
    decl = EndpointDeclaration(
        resource="contact",
        name="get",
        http_method=HttpMethod.GET,
        url_template="contacts/{}",
        parameters=(("id", str),),
    )

    assert decl.resolve(["a b/{c}"]) == "contacts/a b/{c}"


def test_endpoint_declaration_resolve_wrong_arity():
    """Test resolve rejects the wrong number of values."""
    decl = EndpointDeclaration(
        resource="contact",
        name="get",
        http_method=HttpMethod.GET,
        url_template="contacts/{}",
        parameters=(("id", str),),
    )

    with pytest.raises(ValueError):
        decl.resolve([])


def test_contact_to_dict_uses_camel_case(full_contact):
    """Test wire names are camelCase."""
    data = full_contact.to_dict()

    assert data == {
        "email": "johndoe@example.com",
        "firstName": "John",
        "lastName": "Doe",
        "phone": "7223224241",
        "fieldValues": [
            {"field": "1", "value": "The Value for First Field"},
            {"field": "6", "value": "2008-01-20"},
        ],
    }


def test_contact_to_dict_omits_absent_fields():
    """Test None fields are left out of the wire form."""
    contact = Contact(email="johndoe@example.com")

    assert contact.to_dict() == {"email": "johndoe@example.com"}


def test_contact_to_dict_keeps_empty_field_values():
    """Test an empty field value list is distinct from None."""
    contact = Contact(email="johndoe@example.com", field_values=[])

    assert contact.to_dict()["fieldValues"] == []


def test_contact_from_dict_accepts_nulls():
    """Test null optional fields deserialize to None."""
    contact = Contact.from_dict({
        "email": "johndoe@example.com",
        "firstName": "John",
        "lastName": None,
        "phone": "7223224241",
        "fieldValues": None,
    })

    assert contact.first_name == "John"
    assert contact.last_name is None
    assert contact.field_values is None


def test_contact_from_dict_accepts_missing_optional_fields():
    """Test missing optional fields deserialize to None."""
    contact = Contact.from_dict({"email": "johndoe@example.com", "phone": "7223224241"})

    assert contact == Contact(email="johndoe@example.com", phone="7223224241")


def test_contact_from_dict_ignores_unknown_fields():
    """Test extra server-side fields are ignored."""
    contact = Contact.from_dict({"email": "a@b.com", "id": "12", "cdate": "2024-01-01"})

    assert contact == Contact(email="a@b.com")


def test_contact_missing_email_fails():
    """Test deserializing without email fails."""
    with pytest.raises(ContactFormatError):
        Contact.from_dict({"firstName": "John", "lastName": "Doe"})


def test_contact_non_string_email_fails():
    """Test email must be a string."""
    with pytest.raises(ContactFormatError):
        Contact.from_dict({"email": 42})


def test_contact_wrong_optional_type_fails():
    """Test optional fields must be strings when present."""
    with pytest.raises(ContactFormatError) as exc_info:
        Contact.from_dict({"email": "a@b.com", "firstName": ["John"]})

    assert "firstName" in str(exc_info.value)


def test_contact_bad_field_values_fail():
    """Test malformed fieldValues are rejected."""
    with pytest.raises(ContactFormatError):
        Contact.from_dict({"email": "a@b.com", "fieldValues": {"field": "1"}})

    with pytest.raises(ContactFormatError):
        Contact.from_dict({"email": "a@b.com", "fieldValues": [{"field": "1"}]})


def test_contact_format_error_is_value_error():
    """Test ContactFormatError can be caught as ValueError."""
    assert issubclass(ContactFormatError, ValueError)


@pytest.mark.parametrize("field_values", [
    None,
    [],
    [FieldValue(field="1", value="one"), FieldValue(field="6", value="2008-01-20")],
])
def test_contact_round_trip(full_contact, field_values):
    """Test serialize then deserialize yields an equal contact."""
    full_contact.field_values = field_values

    assert Contact.from_json(full_contact.to_json()) == full_contact


def test_contact_request_envelope(full_contact):
    """Test the request envelope wraps the contact."""
    data = json.loads(full_contact.to_request())

    assert list(data.keys()) == ["contact"]
    assert data["contact"]["email"] == "johndoe@example.com"
    assert data["contact"]["firstName"] == "John"


def test_contact_request_from_json():
    """Test parsing a full envelope."""
    json_str = """{
        "contact": {
            "email": "johndoe@example.com",
            "firstName": "John",
            "lastName": "Doe",
            "phone": "7223224241",
            "fieldValues": [
                {"field": "1", "value": "The Value for First Field"},
                {"field": "6", "value": "2008-01-20"}
            ]
        }
    }"""

    request = ContactRequest.from_json(json_str)

    assert request.contact.last_name == "Doe"
    assert request.contact.field_values[1] == FieldValue(field="6", value="2008-01-20")


def test_contact_request_missing_email_fails():
    """Test an envelope whose contact lacks email fails."""
    json_str = """{
        "contact": {
            "firstName": "John",
            "lastName": "Doe",
            "phone": "7223224241",
            "fieldValues": [{"field": "1", "value": "The Value for First Field"}]
        }
    }"""

    with pytest.raises(ContactFormatError):
        ContactRequest.from_json(json_str)


def test_contact_request_missing_contact_key_fails():
    """Test an envelope without the contact key fails."""
    with pytest.raises(ContactFormatError):
        ContactRequest.from_dict({"email": "a@b.com"})


def test_contact_request_invalid_json_fails():
    """Test invalid JSON raises ContactFormatError."""
    with pytest.raises(ContactFormatError):
        ContactRequest.from_json("{not json")


def test_created_contact_fields():
    """Test CreatedContact holds status, id and raw body."""
    created = CreatedContact(status=201, id="42", raw_body='{"contact": {"id": "42"}}')

    assert created.status == 201
    assert created.id == "42"
    assert "raw_body" not in repr(created)
