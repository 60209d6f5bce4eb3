"""easyapi: call HTTP APIs through named routes and domains."""

from easyapi.client import Client
from easyapi.domains.registry import Domain, DomainFunction
from easyapi.domains.routes import RouteTable
from easyapi.errors import (
    ArgumentParseError,
    ConfigurationError,
    DomainOverwriteError,
    EasyAPIError,
    InvalidDomainError,
    InvalidDomainsError,
    MissingURLError,
    RequestError,
    ReservedNameError,
    RouteNotFoundError,
    UnknownDomainError,
    UnknownFunctionError,
    UnsupportedParseError,
)
from easyapi.infrastructure.transport import RequestsTransport, Transport

__all__ = [
    "ArgumentParseError",
    "Client",
    "ConfigurationError",
    "Domain",
    "DomainFunction",
    "DomainOverwriteError",
    "EasyAPIError",
    "InvalidDomainError",
    "InvalidDomainsError",
    "MissingURLError",
    "RequestError",
    "RequestsTransport",
    "ReservedNameError",
    "RouteNotFoundError",
    "RouteTable",
    "Transport",
    "UnknownDomainError",
    "UnknownFunctionError",
    "UnsupportedParseError",
]
