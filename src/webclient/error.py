from __future__ import annotations

import enum
import json
from typing import cast

from webclient.status import Status, register_error_type


class WebClientError(Exception):
    """Base class for webclient exceptions."""

    _status = Status.UNSPECIFIED


class UsageError(WebClientError, ValueError):
    """Command line arguments do not describe a request."""

    _status = Status.INVALID_ARGUMENT


@enum.unique
class URLErrorKind(enum.Enum):
    """Reasons a URL can be rejected before any request is made."""

    NO_BASE_PROTOCOL = "no-base-protocol"
    INVALID_IPV6 = "invalid-ipv6"
    INVALID_IPV4 = "invalid-ipv4"
    INVALID_PORT = "invalid-port"
    EMPTY_HOST = "empty-host"
    INVALID_DOMAIN = "invalid-domain"
    MALFORMED = "malformed"

    @property
    def message(self) -> str | None:
        """The user facing message, or None when the URL is rejected
        silently."""
        return _MESSAGES.get(self)


_MESSAGES = {
    URLErrorKind.NO_BASE_PROTOCOL: (
        "Error: The URL does not have a valid base protocol."
    ),
    URLErrorKind.INVALID_IPV6: "Error: The URL contains an invalid IPv6 address.",
    URLErrorKind.INVALID_IPV4: "Error: The URL contains an invalid IPv4 address.",
    URLErrorKind.INVALID_PORT: "Error: The URL contains an invalid port number.",
}


class InvalidURLError(WebClientError, ValueError):
    """URL failed validation."""

    _status = Status.INVALID_ARGUMENT

    def __init__(self, kind: URLErrorKind, url: str, detail: str | None = None):
        self.kind = kind
        self.url = url
        self.detail = detail
        super().__init__(kind.message or detail or kind.name.lower())

    @property
    def message(self) -> str | None:
        return self.kind.message


class InvalidJSONError(WebClientError, ValueError):
    """Raw JSON given on the command line could not be parsed."""

    _status = Status.INVALID_ARGUMENT

    def __init__(self, document: str, cause: json.JSONDecodeError):
        self.document = document
        self.cause = cause
        super().__init__(f"invalid JSON document: {cause}")


class NotAnObjectError(WebClientError, TypeError):
    """JSON value is not an object and has no keys to sort."""

    _status = Status.INVALID_RESPONSE


class ConnectionFailedError(WebClientError, ConnectionError):
    """No response was received from the server."""

    _status = Status.TCP_ERROR

    def __init__(self, url: str, status: Status = Status.TCP_ERROR):
        self.url = url
        self._status = status
        super().__init__(
            "Error: Unable to connect to the server. Perhaps the network is "
            "offline or the server hostname cannot be resolved."
        )


class HTTPStatusError(WebClientError):
    """Server answered with a non-2xx status code."""

    _status = Status.HTTP_ERROR

    def __init__(self, url: str, status_code: int, status: Status):
        self.url = url
        self.status_code = status_code
        self._status = status
        super().__init__(f"Error: Request failed with status code: {status_code}.")


def webclient_error_status(error: Exception) -> Status:
    return cast(WebClientError, error)._status


register_error_type(WebClientError, webclient_error_status)
