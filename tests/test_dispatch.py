"""
Tests for request dispatch: domain functions, verb shorthands, options, parsing.
"""

from __future__ import annotations

from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

from easyapi import Client, Domain, RouteNotFoundError, UnknownFunctionError, UnsupportedParseError
from easyapi.utils.futures import completed_future, failed_future

ENDPOINT = "http://api.test"


class FakeResponse:
    """Minimal response exposing json() and text like requests.Response."""

    def __init__(self, url: str, body: dict | None = None) -> None:
        self.url = url
        self.status_code = 200
        self._body = body or {}
        self.text = str(self._body)
        self.content = self.text.encode()

    def json(self) -> dict:
        return self._body


@pytest.fixture
def transport() -> MagicMock:
    t = MagicMock()
    t.request.side_effect = lambda method, url, payload, options: completed_future(
        FakeResponse(url, {"method": method})
    )
    return t


@pytest.fixture
def api(transport: MagicMock) -> Client:
    return Client(
        ENDPOINT,
        routes={
            "users.save": "/users/save/:id",
            "users.fetch": "/users/:id",
            "users.list": "/users",
            "users.byname": "/users/byname/:firstname",
        },
        domains={
            "users": {
                "save": {"method": "POST"},
                "list": {"method": "GET", "options": {"parse": "text"}},
                "fetch": {"method": "GET"},
                "byname": {"method": "GET", "route": "users.byname", "options": {"headers": {"X-A": "1"}}},
                "missing": {"method": "DELETE"},
            }
        },
        transport=transport,
    )


def test_domain_function_issues_one_request(api: Client, transport: MagicMock) -> None:
    fut = api.users.fetch({"id": 1})
    assert isinstance(fut, Future)
    response = fut.result()
    assert response.url == ENDPOINT + "/users/1"
    transport.request.assert_called_once_with("GET", ENDPOINT + "/users/1", {"id": 1}, {})


def test_call_matches_attribute_access(api: Client, transport: MagicMock) -> None:
    api.get_domain("users").call("save", {"id": 5}).result()
    transport.request.assert_called_once_with("POST", ENDPOINT + "/users/save/5", {"id": 5}, {})


def test_explicit_route_key_and_options(api: Client, transport: MagicMock) -> None:
    api.users.byname({"firstname": "ada"}).result()
    transport.request.assert_called_once_with(
        "GET", ENDPOINT + "/users/byname/ada", {"firstname": "ada"}, {"headers": {"X-A": "1"}}
    )


def test_missing_route_fails_the_future(api: Client, transport: MagicMock) -> None:
    fut = api.users.missing({"id": 1})
    with pytest.raises(RouteNotFoundError):
        fut.result()
    transport.request.assert_not_called()


def test_unknown_function(api: Client) -> None:
    with pytest.raises(UnknownFunctionError):
        api.users.call("nope")
    with pytest.raises(AttributeError):
        api.users.nope


def test_functions_named_like_domain_attributes(transport: MagicMock) -> None:
    api = Client(
        ENDPOINT,
        routes={"users.name": "/users/:id/name", "users.call": "/users/:id/call", "users.client": "/clients/:id"},
        domains={
            "users": {
                "name": {"method": "GET"},
                "call": {"method": "POST"},
                "client": {"method": "PUT"},
            }
        },
        transport=transport,
    )
    users = api.users

    assert users.name({"id": 1}).result().url == ENDPOINT + "/users/1/name"
    assert users.call({"id": 2}).result().url == ENDPOINT + "/users/2/call"
    assert users.client({"id": 3}).result().url == ENDPOINT + "/clients/3"
    assert [c.args[0] for c in transport.request.call_args_list] == ["GET", "POST", "PUT"]

    assert users._name == "users"
    assert users._client is api
    assert "name" in users.functions
    Domain.call(users, "name", {"id": 4}).result()
    assert transport.request.call_args.args[1] == ENDPOINT + "/users/4/name"


def test_no_data_sends_empty_payload(api: Client, transport: MagicMock) -> None:
    api.users.fetch().result()
    transport.request.assert_called_once_with("GET", ENDPOINT + "/users/:id", {}, {})


@pytest.mark.parametrize("verb", ["get", "post", "put", "delete"])
def test_verb_shorthands(api: Client, transport: MagicMock, verb: str) -> None:
    getattr(api, verb)("/raw", {"a": 1}, {"timeout": 3}).result()
    transport.request.assert_called_once_with(verb.upper(), ENDPOINT + "/raw", {"a": 1}, {"timeout": 3})


@pytest.mark.parametrize("verb", ["get", "post", "put", "delete"])
def test_domain_verb_shorthands_delegate(api: Client, transport: MagicMock, verb: str) -> None:
    getattr(api.users, verb)("/raw", {"a": 1}).result()
    transport.request.assert_called_once_with(verb.upper(), ENDPOINT + "/raw", {"a": 1}, {})


def test_domain_get_route(api: Client) -> None:
    assert api.users.get_route("users.fetch", {"id": 3}) == "/users/3"


def test_ajax_is_fetch(api: Client, transport: MagicMock) -> None:
    api.ajax("PUT", "/x").result()
    transport.request.assert_called_once_with("PUT", ENDPOINT + "/x", {}, {})


def test_client_options_are_merged_and_parse_is_stripped(transport: MagicMock) -> None:
    api = Client(
        ENDPOINT,
        routes={"users.fetch": "/users/:id"},
        domains={"users": {"fetch": {"method": "GET", "options": {"timeout": 1}}}},
        options={"timeout": 10, "headers": {"X": "y"}, "parse": "json"},
        transport=transport,
    )
    out = api.users.fetch({"id": 2}).result()
    assert out == {"method": "GET"}
    transport.request.assert_called_once_with(
        "GET", ENDPOINT + "/users/2", {"id": 2}, {"timeout": 1, "headers": {"X": "y"}}
    )


def test_function_level_parse_text(api: Client) -> None:
    out = api.users.list().result()
    assert out == str({"method": "GET"})


def test_parse_array_buffer_uses_content(api: Client) -> None:
    out = api.get("/users", None, {"parse": "arrayBuffer"}).result()
    assert isinstance(out, bytes)


def test_unavailable_parse_fails_the_future(api: Client) -> None:
    fut = api.get("/users", None, {"parse": "blob"})
    with pytest.raises(UnsupportedParseError, match="blob"):
        fut.result()


def test_unknown_parse_value_is_ignored(api: Client) -> None:
    out = api.get("/users", None, {"parse": "yaml"}).result()
    assert isinstance(out, FakeResponse)


def test_transport_failure_passes_through(transport: MagicMock) -> None:
    err = ConnectionError("ENOTFOUND")
    transport.request.side_effect = None
    transport.request.return_value = failed_future(err)
    api = Client("http://some.not.working.route", routes={"u.s": "/u/:id"}, domains={"u": {"s": {"method": "POST"}}}, transport=transport)
    with pytest.raises(ConnectionError) as exc:
        api.u.s({"id": 5}).result()
    assert exc.value is err


def test_transport_raising_is_delivered_through_future(transport: MagicMock) -> None:
    transport.request.side_effect = RuntimeError("boom")
    api = Client(ENDPOINT, transport=transport)
    fut = api.get("/x")
    with pytest.raises(RuntimeError, match="boom"):
        fut.result()
