"""
Client: named routes and domains on top of an HTTP transport.

    api = Client("https://api.example.com",
                 routes={"users.fetch": "/users/:id"},
                 domains={"users": {"fetch": {"method": "GET"}}})
    api.users.fetch({"id": 1}).result()
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from types import MappingProxyType
from typing import Any

from easyapi.domains.registry import Domain, parse_domain_spec
from easyapi.domains.routes import RouteTable, build_key
from easyapi.errors import (
    ArgumentParseError,
    DomainOverwriteError,
    InvalidDomainsError,
    MissingURLError,
    UnknownDomainError,
)
from easyapi.infrastructure.parsing import parse_response, wants_parse
from easyapi.infrastructure.transport import RequestsTransport, Transport
from easyapi.utils.futures import chain, failed_future
from easyapi.utils.logger import get_logger

logger = get_logger()


class Client:
    """
    Route table, default request options and registered domains for one API.

    Args:
        url: Base URL; every path is appended to it.
        routes: Initial route table, key -> template.
        domains: Domain name -> domain spec, registered on construction.
        options: Default request options, overridden per call and per function.
        transport: Anything with request(method, url, payload, options) -> Future.
            Defaults to a RequestsTransport.

    Raises:
        MissingURLError: If url is empty.
        InvalidDomainsError: If domains is not a mapping of mappings.
    """

    def __init__(
        self,
        url: str,
        routes: Mapping[str, str] | None = None,
        domains: Mapping[str, Mapping[str, Any]] | None = None,
        options: Mapping[str, Any] | None = None,
        transport: Transport | None = None,
    ) -> None:
        if not url:
            raise MissingURLError()

        self.url = url
        self.options: dict[str, Any] = dict(options or {})
        self._routes = RouteTable(routes)
        self._domains: dict[str, Domain] = {}
        self._owns_transport = transport is None
        self.transport: Transport = transport if transport is not None else RequestsTransport()

        if domains is not None:
            if not isinstance(domains, Mapping):
                raise InvalidDomainsError()
            for name, spec in domains.items():
                if not isinstance(spec, Mapping):
                    raise InvalidDomainsError(name)
            self.add_map(domains)

    # --- requests ---

    def fetch(
        self,
        method: str,
        path: str,
        data: Any = None,
        options: Mapping[str, Any] | None = None,
    ) -> Future:
        """
        Send a request to url + path and return a future for the response.

        Options are the client defaults updated with `options`. A `parse` option
        naming a response reader (json, text, ...) resolves the future to the
        parsed body instead of the response. Failures, including a transport
        raising outright, are delivered through the future.
        """
        combined = {**self.options, **dict(options or {})}
        parse = combined.pop("parse", None)
        url = self.url + path

        try:
            fut = self.transport.request(method, url, data if data is not None else {}, combined)
        except Exception as e:
            logger.warning("Transport rejected %s %s: %s", method, path, e)
            return failed_future(e)

        if wants_parse(parse):
            return chain(fut, lambda response: parse_response(response, parse))
        return fut

    def ajax(
        self,
        method: str,
        path: str,
        data: Any = None,
        options: Mapping[str, Any] | None = None,
    ) -> Future:
        """Alias of fetch."""
        return self.fetch(method, path, data, options)

    def get(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self.fetch("GET", path, data, options)

    def post(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self.fetch("POST", path, data, options)

    def put(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self.fetch("PUT", path, data, options)

    def delete(self, path: str, data: Any = None, options: Mapping[str, Any] | None = None) -> Future:
        return self.fetch("DELETE", path, data, options)

    # --- routes ---

    @property
    def routes(self) -> Mapping[str, str]:
        return self._routes.view()

    def get_route(self, key: str, data: Any = None) -> str:
        """Resolve a route key, filling its `:variable` from data. Raises RouteNotFoundError."""
        return self._routes.resolve(key, data)

    def build_route(self, domain: str, fn: str, data: Any = None) -> str:
        return self.get_route(build_key(domain, fn), data)

    def add_routes(self, routes: Mapping[str, str]) -> "Client":
        self._routes.add(routes)
        return self

    def set_routes(self, routes: Mapping[str, str]) -> "Client":
        self._routes.replace(routes)
        return self

    # --- domains ---

    @property
    def domains(self) -> Mapping[str, Domain]:
        return MappingProxyType(self._domains)

    def get_domain(self, name: str) -> Domain:
        try:
            return self._domains[name]
        except KeyError:
            raise UnknownDomainError(name) from None

    def add_domain(self, name: str, spec: Mapping[str, Any]) -> "Client":
        """
        Register (or replace) a domain.

        Raises:
            InvalidDomainError: If spec is not a mapping or a function is malformed.
            ReservedNameError: If a function is named get, post, put or delete.
        """
        functions = parse_domain_spec(name, spec)
        if name in self._domains:
            logger.debug("Replacing domain %s", name)
        self._domains[name] = Domain(name, self, functions)
        logger.debug("Registered domain %s with functions %s", name, sorted(functions))
        return self

    def add_pairs(self, *args: Any) -> "Client":
        """Register domains from alternating name, spec arguments."""
        if len(args) % 2:
            raise ArgumentParseError(args)
        for i in range(0, len(args), 2):
            self.add_domain(args[i], args[i + 1])
        return self

    def add_list(self, items: Sequence[Any]) -> "Client":
        """Register domains from one sequence of alternating names and specs."""
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence) or len(items) % 2:
            raise ArgumentParseError((items,))
        return self.add_pairs(*items)

    def add_map(self, domains: Mapping[str, Mapping[str, Any]]) -> "Client":
        """Register every domain in a name -> spec mapping."""
        if not isinstance(domains, Mapping):
            raise ArgumentParseError((domains,))
        for name, spec in domains.items():
            self.add_domain(name, spec)
        return self

    def add(self, *args: Any) -> "Client":
        """
        Register domains from pairs, a list of pairs or a mapping.

            add("a", {...}, "b", {...})
            add(["a", {...}, "b", {...}])
            add({"a": {...}, "b": {...}})

        No arguments is a no-op. Raises ArgumentParseError for any other shape.
        """
        if not args:
            return self
        if len(args) > 1 and len(args) % 2 == 0:
            return self.add_pairs(*args)
        if len(args) == 1 and isinstance(args[0], (list, tuple)) and len(args[0]) % 2 == 0:
            return self.add_list(args[0])
        if len(args) == 1 and isinstance(args[0], Mapping):
            return self.add_map(args[0])
        raise ArgumentParseError(args)

    def __getitem__(self, name: str) -> Domain:
        return self.get_domain(name)

    def __setitem__(self, name: str, value: Any) -> None:
        raise DomainOverwriteError("You can not directly set domains")

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def __getattr__(self, item: str) -> Domain:
        domains = self.__dict__.get("_domains", {})
        if item in domains:
            return domains[item]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute or domain {item!r}")

    def __setattr__(self, key: str, value: Any) -> None:
        if key in self.__dict__.get("_domains", {}) and key not in self.__dict__:
            raise DomainOverwriteError("You can not directly set domains")
        super().__setattr__(key, value)

    # --- lifecycle ---

    def close(self) -> None:
        """Shut down the transport if this client created it."""
        if self._owns_transport:
            close = getattr(self.transport, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client({self.url!r}, domains={sorted(self._domains)!r})"
