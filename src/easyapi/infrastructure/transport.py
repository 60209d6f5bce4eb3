"""
HTTP transports. A transport takes (method, url, payload, options) and returns a
concurrent.futures.Future resolving to the response.

RequestsTransport is the default: it runs requests.request on a small thread pool.
"""

from __future__ import annotations

import json
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping, Protocol

import requests

from easyapi.utils.config import (
    PAYLOAD_FORMATS,
    max_workers as default_max_workers,
    payload_format as default_payload_format,
    raise_for_status as default_raise_for_status,
    request_timeout,
)
from easyapi.utils.logger import get_logger

logger = get_logger()

# Request options forwarded to requests.request as keyword arguments.
_PASSTHROUGH_OPTIONS = (
    "headers",
    "params",
    "auth",
    "cookies",
    "timeout",
    "verify",
    "allow_redirects",
    "proxies",
    "cert",
    "stream",
)

# Form field holding the JSON-encoded payload.
FORM_FIELD = "json"


class Transport(Protocol):
    def request(
        self,
        method: str,
        url: str,
        payload: Any,
        options: Mapping[str, Any],
    ) -> Future: ...


def _redact_url(url: str) -> str:
    # Avoid leaking tokens if one is ever passed in the URL.
    if not url:
        return url
    for marker in ("token=", "api_key=", "apikey="):
        if marker in url.lower():
            return url.split("?", 1)[0] + "?REDACTED=1"
    return url


class RequestsTransport:
    """
    Transport backed by requests and a thread pool.

    The payload is sent as multipart form data with a single `json` field
    (payload_format="form") or as a JSON body (payload_format="json").
    Non-2xx responses resolve normally unless raise_for_status is on.
    """

    def __init__(
        self,
        timeout: float | None = None,
        max_workers: int | None = None,
        raise_for_status: bool | None = None,
        payload_format: str | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else request_timeout()
        self.raise_for_status = (
            raise_for_status if raise_for_status is not None else default_raise_for_status()
        )
        self.payload_format = payload_format or default_payload_format()
        if self.payload_format not in PAYLOAD_FORMATS:
            raise ValueError(f"payload_format must be one of {PAYLOAD_FORMATS}, got {self.payload_format!r}")
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or default_max_workers(),
            thread_name_prefix="easyapi",
        )

    def _request_kwargs(self, payload: Any, options: Mapping[str, Any]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"timeout": self.timeout}
        for key in _PASSTHROUGH_OPTIONS:
            if key in options:
                kwargs[key] = options[key]

        fmt = options.get("payload_format") or self.payload_format
        if fmt == "json":
            kwargs["json"] = payload
        else:
            kwargs["files"] = {FORM_FIELD: (None, json.dumps(payload), "application/json")}
        return kwargs

    def _send(self, method: str, url: str, kwargs: dict[str, Any]) -> requests.Response:
        try:
            r = requests.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s (%s)", method, _redact_url(url), e, type(e).__name__)
            raise
        logger.info("%s %s responded with status: %s", method, _redact_url(url), r.status_code)
        if self.raise_for_status:
            r.raise_for_status()
        return r

    def request(
        self,
        method: str,
        url: str,
        payload: Any,
        options: Mapping[str, Any],
    ) -> Future:
        kwargs = self._request_kwargs(payload, options)
        logger.debug("Queueing %s %s (options: %s)", method, _redact_url(url), sorted(options))
        return self._executor.submit(self._send, method.upper(), url, kwargs)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
