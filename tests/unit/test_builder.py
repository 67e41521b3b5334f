# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from netext.errors import InvalidComponentsError
from netext.http.adapters import StubTransport
from netext.rest.builder import RequestCreator
from netext.rest.client import RestClient
from netext.rest.endpoint import Endpoint, EndpointPort, HTTPMethod
from netext.rest.parsers import RequestParser
from netext.rest.query import QueryParameter, render_query
from netext.result import Err


def _client(**kwargs) -> RestClient:
    return RestClient("example.com", StubTransport(), **kwargs)


def test_endpoint_port_override_wins():
    request = _client(default_port=443).create_request(Endpoint("/users", port=EndpointPort.override(8443))).value
    assert request.url == "https://example.com:8443/users"


def test_endpoint_port_defaults_to_client():
    request = _client(default_port=443).create_request(Endpoint("/users")).value
    assert request.url == "https://example.com:443/users"
    assert request.method == "GET"
    assert request.body is None


def test_endpoint_port_values():
    assert EndpointPort.use_default().possible_value is None
    assert EndpointPort.use_default().is_default
    assert EndpointPort.override(80).possible_value == 80
    with pytest.raises(ValueError):
        EndpointPort.override(70000)


@pytest.mark.parametrize(
    ("default_use_ssl", "use_ssl", "scheme"),
    [(True, None, "https"), (False, None, "http"), (False, True, "https"), (True, False, "http")],
)
def test_scheme_follows_effective_ssl_flag(default_use_ssl, use_ssl, scheme):
    client = _client(default_use_ssl=default_use_ssl, default_port=8080)
    request = client.create_request(Endpoint("/x", use_ssl=use_ssl)).value
    assert request.url == f"{scheme}://example.com:8080/x"


def test_headers_merge_endpoint_wins():
    client = _client(required_headers={"X": "a", "Y": "c"})
    request = client.create_request(Endpoint("/h", headers={"X": "b"})).value
    assert request.headers == {"X": "b", "Y": "c"}
    assert client.required_headers == {"X": "a", "Y": "c"}


def test_query_parameters_client_first_without_dedup():
    client = _client(required_query_parameters=[QueryParameter("token", "abc")])
    endpoint = Endpoint("/q", query_parameters=[QueryParameter("page", "2"), QueryParameter("token", "abc")])
    request = client.create_request(endpoint).value
    assert request.url == "https://example.com:443/q?token=abc&page=2&token=abc"


def test_query_parameter_encoding():
    assert render_query([QueryParameter("q", "a b&c=d")]) == "q=a%20b%26c%3Dd"
    assert render_query([QueryParameter("flag")]) == "flag"
    pre_encoded = QueryParameter("q", "a b", url_encode=True)
    assert pre_encoded.value == "a%20b"
    assert pre_encoded.encoded
    assert render_query([pre_encoded]) == "q=a%20b"


def test_query_parameter_equality_is_structural():
    assert QueryParameter("k", "v") == QueryParameter("k", "v")
    assert QueryParameter("k") != QueryParameter("k", "")


def test_query_parameter_from_json():
    parameter = QueryParameter.from_json("filter", {"a": 1})
    assert parameter.key == "filter"
    assert parameter.value == "%7B%22a%22:%201%7D"
    assert QueryParameter.from_json("filter", object()) is None
    raw = QueryParameter.from_json("filter", [1], url_encode=False)
    assert raw.value == "[1]"
    assert not raw.encoded


def test_body_is_encoded_with_request_parser():
    endpoint = Endpoint("/devices", method=HTTPMethod.POST, body={"name": "amp"})
    request = _client().create_request(endpoint, RequestParser.json()).value
    assert request.method == "POST"
    assert request.body == b'{"name":"amp"}'


def test_missing_body_skips_request_parser():
    calls = []
    parser = RequestParser(lambda value: calls.append(value))
    request = _client().create_request(Endpoint("/devices", method="post"), parser).value
    assert request.body is None
    assert request.method == "POST"
    assert calls == []


def test_request_parser_failure_aborts_build():
    endpoint = Endpoint("/devices", method=HTTPMethod.PUT, body={"bad": object()})
    result = _client().create_request(endpoint, RequestParser.json())
    assert isinstance(result, Err)
    assert isinstance(result.error, TypeError)


@pytest.mark.parametrize("hostname", ["", "bad host", "host/path"])
def test_invalid_hostname_is_a_build_error(hostname):
    client = RestClient(hostname, StubTransport())
    result = client.create_request(Endpoint("/x"))
    assert isinstance(result.error, InvalidComponentsError)
    assert result.error.component == "hostname"


def test_path_without_leading_slash_fails_url_validation():
    result = _client().create_request(Endpoint("users"))
    assert isinstance(result.error, InvalidComponentsError)
    assert result.error.component == "url"


def test_unknown_scheme_is_a_build_error():
    creator = RequestCreator(
        port=80, scheme="ftp", hostname="example.com", headers={}, query_parameters=(), path="/", method=HTTPMethod.GET
    )
    result = creator.create_request()
    assert result.error.component == "scheme"


def test_ipv6_hostname_is_bracketed():
    client = RestClient("2001:db8::1", StubTransport(), default_port=8080, default_use_ssl=False)
    request = client.create_request(Endpoint("/status")).value
    assert request.url == "http://[2001:db8::1]:8080/status"


def test_endpoint_is_immutable():
    endpoint = Endpoint("/x", headers={"A": "1"})
    with pytest.raises(TypeError):
        endpoint.headers["B"] = "2"  # type: ignore[index]
    assert endpoint.with_body([1]).body == [1]
    assert endpoint.body is None


def test_client_configuration_is_read_at_build_time():
    client = _client()
    client.hostname = "other.example.com"
    client.default_port = 9000
    request = client.create_request(Endpoint("/x")).value
    assert request.url == "https://other.example.com:9000/x"


def test_query_parameter_from_json_escapes_delimiters():
    client = _client()
    parameter = QueryParameter.from_json("filter", {"name": "a&b=c+d"})
    endpoint = Endpoint("/q", query_parameters=[parameter, QueryParameter("page", "2")])

    url = client.create_request(endpoint).value.url

    query = parse_qs(urlsplit(url).query)
    assert sorted(query) == ["filter", "page"]
    assert json.loads(query["filter"][0]) == {"name": "a&b=c+d"}
