"""
Domain registry: turns a domain spec into a Domain whose functions issue requests.

A domain spec maps function names to {"method", "route"?, "options"?}. Entries
that are not mappings are ignored; the verbs get/post/put/delete are reserved
for the Domain's own shorthands.
"""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import Future
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable

from easyapi.errors import (
    DomainOverwriteError,
    InvalidDomainError,
    RequestError,
    ReservedNameError,
    UnknownFunctionError,
)
from easyapi.utils.futures import failed_future
from easyapi.utils.logger import get_logger

if TYPE_CHECKING:
    from easyapi.client import Client

logger = get_logger()

RESERVED_NAMES = frozenset({"get", "post", "put", "delete"})
METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass(frozen=True)
class DomainFunction:
    """One configured endpoint of a domain."""

    name: str
    method: str
    route: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, domain: str, name: str, cfg: Mapping[str, Any]) -> "DomainFunction":
        raw_method = cfg.get("method")
        method = raw_method.upper() if isinstance(raw_method, str) else None
        if method not in METHODS:
            raise InvalidDomainError(
                f"Function [{domain}.{name}] needs a method, one of {', '.join(METHODS)} "
                f"(got {raw_method!r})"
            )
        route = cfg.get("route") or None
        options = cfg.get("options") or {}
        if not isinstance(options, Mapping):
            raise InvalidDomainError(f"Options of [{domain}.{name}] must be an object")
        return cls(name=name, method=method, route=route, options=MappingProxyType(dict(options)))


def parse_domain_spec(name: str, spec: Any) -> dict[str, DomainFunction]:
    """
    Validate a domain spec and build its functions.

    Raises:
        InvalidDomainError: If `name` is empty or `spec` is not a mapping.
        ReservedNameError: If a function is called get, post, put or delete.
    """
    if not isinstance(name, str) or not name:
        raise InvalidDomainError(f"Domain name must be a non-empty string (got {name!r})")
    if not isinstance(spec, Mapping):
        raise InvalidDomainError(f"Domain [{name}] must be an object (got {type(spec).__name__})")

    functions: dict[str, DomainFunction] = {}
    for key, cfg in spec.items():
        if key in RESERVED_NAMES:
            raise ReservedNameError(key)
        if isinstance(cfg, Mapping):
            functions[key] = DomainFunction.from_config(name, key, cfg)
    return functions


class Domain:
    """
    A named group of API functions bound to a client.

    Functions are reached with `domain.call("fetch", data)` or `domain.fetch(data)`.
    A configured function takes precedence over a Domain attribute of the same
    name (`domain.call(data)` invokes a function called "call"), so the
    domain's own state also lives under `_name` and `_client`.
    The function set is fixed once built; re-register the domain to change it.
    """

    def __init__(self, name: str, client: Client, functions: Mapping[str, DomainFunction] | None = None) -> None:
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_client", client)
        object.__setattr__(self, "_functions", dict(functions or {}))

    @property
    def name(self) -> str:
        return self._name

    @property
    def client(self) -> Client:
        return self._client

    @property
    def functions(self) -> Mapping[str, DomainFunction]:
        return MappingProxyType(self._functions)

    def call(self, fn: str, data: Any = None) -> Future:
        """
        Invoke a configured function.

        The route is the function's explicit `route` key when set, otherwise
        "<domain>.<fn>". A missing route fails the returned future.

        Raises:
            UnknownFunctionError: If the domain has no function `fn`.
        """
        try:
            entry = self._functions[fn]
        except KeyError:
            raise UnknownFunctionError(self._name, fn) from None

        try:
            if entry.route:
                path = self._client.get_route(entry.route, data)
            else:
                path = self._client.build_route(self._name, fn, data)
        except RequestError as e:
            logger.warning("Could not resolve route for %s.%s: %s", self._name, fn, e)
            return failed_future(e)

        return self._client.fetch(entry.method, path, data, dict(entry.options))

    def get_route(self, key: str, data: Any = None) -> str:
        return self._client.get_route(key, data)

    def get(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self._client.get(path, data, options)

    def post(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self._client.post(path, data, options)

    def put(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self._client.put(path, data, options)

    def delete(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self._client.delete(path, data, options)

    def _invoker(self, fn: str) -> Callable[[Any], Future]:
        def _invoke(data: Any = None) -> Future:
            return Domain.call(self, fn, data)

        _invoke.__name__ = fn
        return _invoke

    def __getattribute__(self, item: str) -> Any:
        if not item.startswith("_"):
            functions = object.__getattribute__(self, "__dict__").get("_functions", {})
            if item in functions:
                return object.__getattribute__(self, "_invoker")(item)
        return object.__getattribute__(self, item)

    def __getattr__(self, item: str) -> Callable[[Any], Future]:
        # Reached for underscore-prefixed functions and unknown names.
        functions = self.__dict__.get("_functions", {})
        if item not in functions:
            raise UnknownFunctionError(self.__dict__.get("_name", "?"), item)
        return self._invoker(item)

    def __setattr__(self, key: str, value: Any) -> None:
        raise DomainOverwriteError("You can not directly set API functions")

    def __contains__(self, fn: object) -> bool:
        return fn in self._functions

    def __repr__(self) -> str:
        return f"Domain({self._name!r}, functions={sorted(self._functions)!r})"
