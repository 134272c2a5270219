from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

import httpx

from webclient.canonical import render_body
from webclient.error import ConnectionFailedError, HTTPStatusError
from webclient.request import Method, RequestIntent
from webclient.status import Status, http_response_code_status, status_for_error
from webclient.url import normalize_url, validate_url

logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = "webclient/0.1.0"
DEFAULT_MAX_REDIRECTS = 10


@dataclass
class Response:
    """The parts of a successful response that get printed."""

    status_code: int
    text: str
    content_type: str = ""

    @property
    def status(self) -> Status:
        return http_response_code_status(self.status_code)


class Client:
    """Client sending one request at a time, blocking until the server
    answers or the connection fails."""

    __slots__ = ("_client",)

    def __init__(
        self,
        follow_redirects: bool = True,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Create a new client.

        Args:
            follow_redirects: Whether 3xx responses are followed.

            max_redirects: How many redirects to follow before giving up.

            user_agent: Value of the User-Agent header.

            transport: Transport to send requests with, mostly useful in
                tests. Defaults to the httpx HTTP transport.
        """
        self._client = httpx.Client(
            timeout=None,
            follow_redirects=follow_redirects,
            max_redirects=max_redirects,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self._client.close()

    def send(self, intent: RequestIntent) -> Response:
        """Send the request.

        Raises:
            ConnectionFailedError: if no response was received.
            HTTPStatusError: if the response status is not 2xx.
        """
        logger.debug("sending %s request to %s", intent.method, intent.url)
        try:
            response = self._client.request(
                str(intent.method), normalize_url(intent.url), **intent.content()
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            status = status_for_error(e)
            logger.info(
                "%s %s failed: %s (%s)", intent.method, intent.url, e, status
            )
            raise ConnectionFailedError(intent.url, status) from e

        logger.debug(
            "%s %s returned %d", intent.method, intent.url, response.status_code
        )
        if not response.is_success:
            raise HTTPStatusError(
                intent.url,
                response.status_code,
                http_response_code_status(response.status_code),
            )
        return Response(
            status_code=response.status_code,
            text=response.text,
            content_type=response.headers.get("content-type", ""),
        )


def run(
    intent: RequestIntent,
    client: Optional[Client] = None,
    file: Optional[TextIO] = None,
    sort_nested: bool = False,
) -> Status:
    """Validate the URL, send the request and print the outcome.

    GET responses are printed as is. POST responses that hold a JSON
    object are printed with sorted keys, anything else is printed as is.
    Failures are printed as a one line message. Nothing is retried.

    Returns:
        The status of the request.
    """
    print(f"Requesting URL: {intent.url}", file=file)
    print(f"Method: {intent.method}", file=file)
    if not validate_url(intent.url, file=file):
        return Status.INVALID_ARGUMENT

    if client is None:
        with Client() as client:
            return _send_and_print(client, intent, file, sort_nested)
    return _send_and_print(client, intent, file, sort_nested)


def _send_and_print(
    client: Client, intent: RequestIntent, file: Optional[TextIO], sort_nested: bool
) -> Status:
    try:
        response = client.send(intent)
    except (ConnectionFailedError, HTTPStatusError) as e:
        print(e, file=file)
        return status_for_error(e)

    print("Response body:", file=file)
    if intent.method is Method.GET:
        print(response.text, end="", file=file)
    else:
        print(render_body(response.text, recursive=sort_nested), file=file)
    return response.status
