"""
Optional response post-processing selected with the `parse` request option.
"""

from __future__ import annotations

from typing import Any

from easyapi.errors import UnsupportedParseError

PARSE_OPTIONS = ("arrayBuffer", "blob", "formData", "json", "text")

# Fallbacks for responses that expose the body under a different name (requests).
_ALIASES: dict[str, str] = {
    "arrayBuffer": "content",
}


def wants_parse(parse: Any) -> bool:
    """True if `parse` names a supported post-processing step; other values are ignored."""
    return isinstance(parse, str) and parse in PARSE_OPTIONS


def parse_response(response: Any, parse: str) -> Any:
    """
    Read the response body the way `parse` asks for.

    A callable attribute named after the option is called (response.json()), a
    plain attribute is returned (response.text).

    Errors raised by the reader itself (invalid JSON) propagate unchanged.

    Raises:
        UnsupportedParseError: If the response has no way to produce `parse`.
    """
    for attr in (parse, _ALIASES.get(parse)):
        if not attr:
            continue
        reader = getattr(response, attr, None)
        if reader is None:
            continue
        return reader() if callable(reader) else reader
    raise UnsupportedParseError(parse)
