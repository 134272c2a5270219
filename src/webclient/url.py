"""URL validation.

URLs are checked before any request goes out so that the user gets a
precise message for the common mistakes (a missing scheme, a mistyped IP
literal or port) instead of a generic connection failure. Host parsing for
the special schemes follows the WHATWG URL standard closely enough that
the same inputs are accepted and rejected as by browsers.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import List, Optional, TextIO, Tuple
from urllib.parse import SplitResult, unquote, urlsplit

from webclient.error import InvalidURLError, URLErrorKind

logger = logging.getLogger(__name__)


SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})

# Some URL parsers accept data:// as an absolute URL with a valid base
# protocol, it never names anything we can send a request to.
_DATA_SCHEME_PREFIX = "data://"

_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #/:<>?@[\\]^|")
_FORBIDDEN_DOMAIN_CHARS = _FORBIDDEN_HOST_CHARS | frozenset(
    [chr(c) for c in range(0x20)] + ["%", "\x7f"]
)

_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))

_IPV4_PART_PATTERNS = {
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
    8: re.compile(r"[0-7]+"),
}


def validate_url(url: str, file: Optional[TextIO] = None) -> bool:
    """Returns True if the URL can be used for a request.

    On failure the reason is printed to file (stdout by default) and
    False is returned. Some malformed URLs are rejected without a message;
    use check_url to get the reason in every case.
    """
    try:
        check_url(url)
    except InvalidURLError as e:
        logger.debug("rejected URL %r: %s (%s)", url, e.kind.name, e.detail)
        if e.message is not None:
            print(e.message, file=file)
        return False
    return True


def check_url(url: str) -> None:
    """Validate a URL.

    Raises:
        InvalidURLError: if the URL is not an absolute URL with a usable
            host and port. The kind attribute tells why.
    """
    if url.startswith(_DATA_SCHEME_PREFIX):
        raise InvalidURLError(
            URLErrorKind.NO_BASE_PROTOCOL, url, "data scheme is not supported"
        )

    cleaned = normalize_url(url)
    parts = _split(cleaned, url)
    if not parts.scheme:
        raise InvalidURLError(URLErrorKind.NO_BASE_PROTOCOL, url, "relative URL")

    special = parts.scheme in SPECIAL_SCHEMES
    if special and parts.scheme != "file" and not parts.netloc:
        # http:example.com and http:/example.com both mean http://example.com
        rest = cleaned.split(":", 1)[1].lstrip("/\\")
        parts = _split(f"{parts.scheme}://{rest}", url)

    host, port = _split_netloc(parts.netloc)

    if not host:
        if special and parts.scheme != "file":
            raise InvalidURLError(URLErrorKind.EMPTY_HOST, url, "empty host")
    elif host.startswith("["):
        _check_ipv6(host, url)
    elif special:
        _check_domain(host, url)
    else:
        _check_opaque_host(host, url)

    if port:
        _check_port(port, url)


def normalize_url(url: str) -> str:
    """Returns the URL with surrounding spaces and control characters
    removed and, for the special schemes, backslashes before the query
    read as slashes."""
    url = url.strip(_C0_CONTROL_OR_SPACE)
    url = url.replace("\t", "").replace("\n", "").replace("\r", "")
    scheme, sep, rest = url.partition(":")
    if not sep or scheme.lower() not in SPECIAL_SCHEMES:
        return url
    end = len(rest)
    for c in "?#":
        i = rest.find(c)
        if 0 <= i < end:
            end = i
    head = rest[:end].replace("\\", "/")
    return f"{scheme}:{head}{rest[end:]}"


def _split(url: str, original: str) -> SplitResult:
    try:
        return urlsplit(url)
    except ValueError as e:
        # urlsplit only raises on bracketed hosts it can't make sense of.
        if "[" in url or "]" in url:
            kind = URLErrorKind.INVALID_IPV6
        else:
            kind = URLErrorKind.MALFORMED
        raise InvalidURLError(kind, original, str(e)) from e


def _split_netloc(netloc: str) -> Tuple[str, str]:
    hostinfo = netloc.rpartition("@")[2]
    if hostinfo.startswith("["):
        end = hostinfo.find("]")
        if end < 0:
            return hostinfo, ""
        host, rest = hostinfo[: end + 1], hostinfo[end + 1 :]
        return host, rest[1:] if rest.startswith(":") else rest
    host, _, port = hostinfo.partition(":")
    return host, port


def _check_ipv6(host: str, url: str):
    if not host.endswith("]"):
        raise InvalidURLError(URLErrorKind.INVALID_IPV6, url, host)
    literal = host[1:-1]
    # ipaddress accepts zone identifiers, URLs do not.
    if "%" in literal:
        raise InvalidURLError(URLErrorKind.INVALID_IPV6, url, host)
    try:
        ipaddress.IPv6Address(literal)
    except ValueError as e:
        raise InvalidURLError(URLErrorKind.INVALID_IPV6, url, str(e)) from e


def _check_domain(host: str, url: str):
    domain = unquote(host).lower()
    for c in domain:
        if c in _FORBIDDEN_DOMAIN_CHARS:
            raise InvalidURLError(
                URLErrorKind.INVALID_DOMAIN, url, f"forbidden character {c!r}"
            )
    if _ends_in_a_number(domain) and parse_ipv4(domain) is None:
        raise InvalidURLError(URLErrorKind.INVALID_IPV4, url, domain)


def _check_opaque_host(host: str, url: str):
    for c in host:
        if c in _FORBIDDEN_HOST_CHARS:
            raise InvalidURLError(
                URLErrorKind.INVALID_DOMAIN, url, f"forbidden character {c!r}"
            )


def _check_port(port: str, url: str):
    if not (port.isascii() and port.isdigit()) or int(port) > 65535:
        raise InvalidURLError(URLErrorKind.INVALID_PORT, url, port)


def _ends_in_a_number(domain: str) -> bool:
    labels = domain.split(".")
    if labels[-1] == "":
        if len(labels) == 1:
            return False
        labels.pop()
    last = labels[-1]
    if last.isascii() and last.isdigit():
        return True
    return _parse_ipv4_number(last) is not None


def parse_ipv4(domain: str) -> Optional[ipaddress.IPv4Address]:
    """Parse a host the way browsers do, allowing shorthand forms like
    127.1 and hexadecimal or octal parts.

    Returns None if the host is not a valid IPv4 address.
    """
    labels = domain.split(".")
    if labels[-1] == "" and len(labels) > 1:
        labels.pop()
    if len(labels) > 4:
        return None

    numbers: List[int] = []
    for label in labels:
        n = _parse_ipv4_number(label)
        if n is None:
            return None
        numbers.append(n)

    if any(n > 255 for n in numbers[:-1]):
        return None
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        return None

    address = numbers[-1]
    for i, n in enumerate(numbers[:-1]):
        address += n * 256 ** (3 - i)
    return ipaddress.IPv4Address(address)


def _parse_ipv4_number(label: str) -> Optional[int]:
    if not label:
        return None
    radix = 10
    if label[:2] in ("0x", "0X"):
        label, radix = label[2:], 16
    elif len(label) > 1 and label.startswith("0"):
        label, radix = label[1:], 8
    if not label:
        return 0
    if not label.isascii() or not _IPV4_PART_PATTERNS[radix].fullmatch(label):
        return None
    return int(label, radix)
