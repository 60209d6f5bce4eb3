"""easyapi exception hierarchy.

Configuration errors are raised synchronously while routes and domains are
being set up. Request errors are delivered through the future returned by a
request, never raised from the call itself.
"""

from __future__ import annotations


class EasyAPIError(Exception):
    """Base for all easyapi errors."""


class ConfigurationError(EasyAPIError):
    """Raised when the client, a route or a domain is set up incorrectly."""


class MissingURLError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("URL is required")


class InvalidDomainsError(ConfigurationError):
    """The `domains` argument of Client is not a mapping of mappings."""

    def __init__(self, name: str | None = None) -> None:
        msg = "Expecting objects in domains"
        if name is not None:
            msg = f"{msg} (got a non-object for [{name}])"
        super().__init__(msg)
        self.name = name


class InvalidDomainError(ConfigurationError):
    """A single domain spec, or one of its functions, is malformed."""


class ReservedNameError(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"You can not define a function with the following reserved name: {name}")
        self.name = name


class ArgumentParseError(ConfigurationError):
    def __init__(self, args: tuple) -> None:
        super().__init__(f"Could not parse arguments: {args!r}")
        self.args_received = args


class DomainOverwriteError(ConfigurationError):
    """Domains and domain functions can only be replaced through registration."""


class UnknownDomainError(EasyAPIError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Domain [{self.name}] does not exist"


class UnknownFunctionError(EasyAPIError, AttributeError):
    def __init__(self, domain: str, name: str) -> None:
        super().__init__(f"Domain [{domain}] has no function [{name}]")
        self.domain = domain
        self.name = name


class RequestError(EasyAPIError):
    """Raised while building or post-processing a request."""


class RouteNotFoundError(RequestError, KeyError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"API Route [{self.key}] does not exist"


class UnsupportedParseError(RequestError):
    def __init__(self, parse: str) -> None:
        super().__init__(f"Could not parse the results with [{parse}]")
        self.parse = parse
