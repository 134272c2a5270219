from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from webclient.canonical import loads
from webclient.error import InvalidJSONError, UsageError
from webclient.form import encode_form, parse_form


@enum.unique
class Method(str, enum.Enum):
    GET = "GET"
    POST = "POST"

    def __str__(self):
        return self.value


@enum.unique
class BodyKind(enum.Enum):
    """How the body of a POST request was given and is sent."""

    FORM_AS_JSON = "form"
    """Form pairs from -d, sent as a JSON object of strings."""

    URLENCODED = "urlencoded"
    """Form pairs from -d, sent as application/x-www-form-urlencoded."""

    JSON = "json"
    """A raw JSON document from --json, sent as is."""


@dataclass(frozen=True)
class RequestIntent:
    """A framework-agnostic description of the one request to send."""

    url: str
    method: Method
    body_kind: Optional[BodyKind] = None
    body: Any = None

    def __post_init__(self):
        if self.method is Method.GET and self.body_kind is not None:
            raise ValueError("GET requests cannot carry a body")
        if self.method is Method.POST and self.body_kind is None:
            raise ValueError("POST requests must carry a body")

    @classmethod
    def from_args(
        cls,
        url: str,
        method: Optional[str] = None,
        data: Optional[str] = None,
        json: Optional[str] = None,
        urlencoded: bool = False,
    ) -> RequestIntent:
        """Build a request from command line arguments.

        A --json document takes precedence over -X and -d. Any -X value
        selects a POST of the -d form data; without either a GET is sent.

        Raises:
            UsageError: if -X is given without -d.
            InvalidJSONError: if the --json document does not parse.
        """
        if json is not None:
            return cls(url, Method.POST, BodyKind.JSON, _parse_json(json))
        if method is not None:
            if data is None:
                raise UsageError("-d <data> is required when -X is given")
            kind = BodyKind.URLENCODED if urlencoded else BodyKind.FORM_AS_JSON
            return cls(url, Method.POST, kind, parse_form(data))
        return cls(url, Method.GET)

    def content(self) -> Dict[str, Any]:
        """Keyword arguments that attach the body to an httpx request."""
        if self.body_kind is None:
            return {}
        if self.body_kind is BodyKind.URLENCODED:
            return {
                "content": encode_form(self.body),
                "headers": {"Content-Type": "application/x-www-form-urlencoded"},
            }
        return {"json": self.body}


def _parse_json(document: str) -> Any:
    try:
        return loads(document)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(document, e) from e
