"""
GraphQL transport: envelope shape and normalization of backend answers
"""

import json

import httpx
import pytest

from mtadmin.core.exceptions import ErrorKind, TransportError
from mtadmin.core.transport import GraphQLTransport, operation_name

QUERY = "query GetCarById($id: Int!) { getCarById(id: $id) { id } }"


def make_transport(handler, **kwargs):
    return GraphQLTransport("http://backend.test/graphql", transport=httpx.MockTransport(handler), **kwargs)


def test_operation_name():
    assert operation_name(QUERY) == "GetCarById"
    assert operation_name("mutation DeleteHoliday($id: Int!) { x }") == "DeleteHoliday"
    assert operation_name("{ ping }") == "anonymous"


def test_sends_query_and_variables_envelope():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"getCarById": {"id": 3}}})

    with make_transport(handler) as transport:
        result = transport.execute(QUERY, {"id": 3})

    assert seen["method"] == "POST"
    assert seen["content_type"] == "application/json"
    assert seen["body"] == {"query": QUERY, "variables": {"id": 3}}
    assert result.status is True
    assert result.data == {"getCarById": {"id": 3}}


def test_missing_variables_are_sent_as_empty_object():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {}})

    with make_transport(handler) as transport:
        transport.execute("query Ping { ping }")

    assert bodies[0]["variables"] == {}


def test_auth_token_header(monkeypatch):
    monkeypatch.setenv("GRAPHQL_AUTH_TOKEN", "secret")
    headers = {}

    def handler(request):
        headers.update(request.headers)
        return httpx.Response(200, json={"data": {}})

    with make_transport(handler) as transport:
        transport.execute(QUERY, {"id": 1})

    assert headers["authorization"] == "Bearer secret"


def test_backend_errors_become_failed_result():
    def handler(request):
        return httpx.Response(200, json={
            "data": None,
            "errors": [{"message": "Car not found"}, {"message": "second"}],
        })

    with make_transport(handler) as transport:
        result = transport.execute(QUERY, {"id": 99})

    assert result.status is False
    assert result.message == "Car not found; second"
    assert result.error_kind == ErrorKind.APPLICATION


def test_errors_win_over_http_status():
    def handler(request):
        return httpx.Response(400, json={"errors": [{"message": "Bad input"}]})

    with make_transport(handler) as transport:
        result = transport.execute(QUERY, {"id": 1})

    assert result.status is False
    assert result.message == "Bad input"


def test_unreachable_backend_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            transport.execute(QUERY, {"id": 1})

    assert exc_info.value.kind == ErrorKind.TRANSPORT
    assert "connection refused" in exc_info.value.message


def test_malformed_body_raises_transport_error():
    def handler(request):
        return httpx.Response(502, text="<html>Bad gateway</html>")

    with make_transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            transport.execute(QUERY, {"id": 1})

    assert exc_info.value.status_code == 502


def test_unexpected_shape_raises_transport_error():
    def handler(request):
        return httpx.Response(200, json={"result": "ok"})

    with make_transport(handler) as transport:
        with pytest.raises(TransportError):
            transport.execute(QUERY, {"id": 1})


def test_http_error_without_graphql_errors_raises():
    def handler(request):
        return httpx.Response(500, json={"data": None})

    with make_transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            transport.execute(QUERY, {"id": 1})

    assert exc_info.value.status_code == 500


def test_null_data_is_normalized_to_empty_dict():
    def handler(request):
        return httpx.Response(200, json={"data": None})

    with make_transport(handler) as transport:
        result = transport.execute(QUERY, {"id": 1})

    assert result.status is True
    assert result.data == {}
