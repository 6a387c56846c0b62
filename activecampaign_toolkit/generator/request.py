"""Single-use HTTP request builder returned by generated client methods."""

import logging
from typing import Any

import httpx

from ..core.models import HttpMethod, RequestAlreadySentError

logger = logging.getLogger(__name__)


class RequestBuilder:
    """
    An about-to-be-sent HTTP request.

    Accumulates query parameters, headers and a body, then is consumed by
    exactly one call to ``send()``. Builder methods return ``self`` so calls
    can be chained:

        >>> builder.query({"email": "luke@skywalker.com"}).send()
    """

    def __init__(self, http_client: httpx.Client, http_method: HttpMethod, url: str):
        self.http_client = http_client
        self.http_method = http_method
        self.url = url
        self._params: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}
        self._json: Any = None
        self._content: str | bytes | None = None
        self._sent = False

    @property
    def sent(self) -> bool:
        return self._sent

    def query(self, params: dict[str, Any] | list[tuple[str, Any]]) -> "RequestBuilder":
        """
        Append query parameters.

        Values are handed to httpx unescaped; httpx encodes them once.
        """
        items = params.items() if isinstance(params, dict) else params
        for key, value in items:
            self._params.append((key, str(value)))
        return self

    def header(self, name: str, value: str) -> "RequestBuilder":
        self._headers[name] = value
        return self

    def json(self, payload: Any) -> "RequestBuilder":
        """Attach a JSON-serializable body."""
        self._json = payload
        self._content = None
        return self

    def body(self, content: str | bytes) -> "RequestBuilder":
        """Attach a pre-serialized JSON body."""
        self._content = content
        self._json = None
        self._headers.setdefault("Content-Type", "application/json")
        return self

    def build(self) -> httpx.Request:
        """Build the httpx request without sending it."""
        return self.http_client.build_request(
            method=self.http_method.value,
            url=self.url,
            params=self._params or None,
            headers=self._headers or None,
            content=self._content,
            json=self._json,
        )

    def send(self) -> httpx.Response:
        """
        Execute the request over the shared HTTP client.

        Any HTTP status, including 4xx and 5xx, is returned as a normal
        response for the caller to inspect.

        Returns:
            The httpx response

        Raises:
            RequestAlreadySentError: If this builder was already sent
            httpx.RequestError: On connection, timeout or protocol failures
        """
        if self._sent:
            raise RequestAlreadySentError(
                f"{self.http_method.value} {self.url} has already been sent"
            )
        self._sent = True

        request = self.build()
        logger.debug(f"Sending {request.method} {request.url}")
        response = self.http_client.send(request)
        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return response

    def __repr__(self) -> str:
        state = "sent" if self._sent else "unsent"
        return f"<RequestBuilder {self.http_method.value} {self.url} ({state})>"
