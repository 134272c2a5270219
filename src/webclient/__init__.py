"""A minimal command line HTTP client."""

from __future__ import annotations

import webclient.integrations
from webclient.canonical import canonicalize, render_body
from webclient.client import Client, Response, run
from webclient.error import (
    ConnectionFailedError,
    HTTPStatusError,
    InvalidJSONError,
    InvalidURLError,
    NotAnObjectError,
    URLErrorKind,
    UsageError,
    WebClientError,
)
from webclient.form import encode_form, parse_form
from webclient.request import BodyKind, Method, RequestIntent
from webclient.status import Status
from webclient.url import check_url, validate_url

__version__ = "0.1.0"

__all__ = [
    "BodyKind",
    "Client",
    "ConnectionFailedError",
    "HTTPStatusError",
    "InvalidJSONError",
    "InvalidURLError",
    "Method",
    "NotAnObjectError",
    "RequestIntent",
    "Response",
    "Status",
    "URLErrorKind",
    "UsageError",
    "WebClientError",
    "canonicalize",
    "check_url",
    "encode_form",
    "parse_form",
    "render_body",
    "run",
    "validate_url",
]
