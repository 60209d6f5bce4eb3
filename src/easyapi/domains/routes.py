"""
Route table: route key -> URL template with an optional `:variable` placeholder.

Only the first placeholder in a template is substituted. Missing data leaves the
placeholder text in the path rather than failing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from easyapi.errors import RouteNotFoundError

# ":name" where name is the identifier following the colon
_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def build_key(domain: str, fn: str) -> str:
    """Route key for a domain function, e.g. ("users", "fetch") -> "users.fetch"."""
    return f"{domain}.{fn}"


def placeholder_name(template: str) -> str | None:
    """Return the name of the first `:variable` in the template, if any."""
    m = _PLACEHOLDER.search(template)
    return m.group(1) if m else None


def fill_template(template: str, data: Any) -> str:
    """
    Substitute the first placeholder with the matching value from `data`.

    Returns the template unchanged if it has no placeholder or `data` has no
    value for it.
    """
    name = placeholder_name(template)
    if name is None or not isinstance(data, Mapping) or name not in data:
        return template
    return template.replace(f":{name}", str(data[name]), 1)


class RouteTable:
    """Mutable mapping of route keys to templates, changed only via add/replace."""

    def __init__(self, routes: Mapping[str, str] | None = None) -> None:
        self._routes: dict[str, str] = dict(routes or {})

    def resolve(self, key: str, data: Any = None) -> str:
        """
        Look up `key` and fill its placeholder from `data`.

        Raises:
            RouteNotFoundError: If no route is registered under `key`.
        """
        try:
            template = self._routes[key]
        except KeyError:
            raise RouteNotFoundError(key) from None
        return fill_template(str(template), data)

    def add(self, routes: Mapping[str, str]) -> None:
        """Shallow-merge routes in; on collision the new template wins."""
        self._routes.update(dict(routes))

    def replace(self, routes: Mapping[str, str]) -> None:
        new = dict(routes)
        self._routes.clear()
        self._routes.update(new)

    def view(self) -> Mapping[str, str]:
        """Read-only live view of the table."""
        return MappingProxyType(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({self._routes!r})"
