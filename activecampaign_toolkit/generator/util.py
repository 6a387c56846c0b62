"""Helpers for inspecting raw HTTP responses."""

import json

import httpx


def get_header_value(response: httpx.Response, name: str) -> str | None:
    """Return a response header value, or None if it is absent."""
    return response.headers.get(name)


def content_type(response: httpx.Response) -> str | None:
    """
    Return the response media type without parameters.

    ``text/html; charset=UTF-8`` becomes ``text/html``.
    """
    value = get_header_value(response, "content-type")
    if not value:
        return None
    return value.split(";", 1)[0].strip().lower()


def is_json_response(response: httpx.Response) -> bool:
    media_type = content_type(response)
    return media_type is not None and (
        media_type == "application/json" or media_type.endswith("+json")
    )


def format_response_body(response: httpx.Response) -> str:
    """
    Render a response body for display.

    JSON bodies are pretty-printed; anything else, including JSON that
    fails to parse, is returned as text.
    """
    if is_json_response(response):
        try:
            return json.dumps(response.json(), indent=2)
        except ValueError:
            pass
    return response.text
