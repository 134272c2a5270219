from typing import Dict, Mapping
from urllib.parse import urlencode


def parse_form(data: str) -> Dict[str, str]:
    """Parse form data of the form key=value&key=value.

    Each segment is split on its first "=", so values may contain "="
    themselves. Segments without any "=" are dropped. Keys are not decoded
    and values are kept as strings; when a key repeats, the last value
    wins.
    """
    pairs: Dict[str, str] = {}
    for segment in data.split("&"):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        pairs[key] = value
    return pairs


def encode_form(pairs: Mapping[str, str]) -> str:
    """Render pairs as an application/x-www-form-urlencoded body."""
    return urlencode(list(pairs.items()))
