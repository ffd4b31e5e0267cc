"""
Shared fixtures: an in-process GraphQL backend behind httpx.MockTransport
"""

import json
import re

import httpx
import pytest

from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import RequestContext

ENDPOINT = "http://backend.test/graphql"

_ROOT_FIELD_RE = re.compile(r"\{\s*(\w+)\s*\(")


class FakeBackend:
    """
    Answers GraphQL envelopes by root field.

    Routes hold either a value (returned as data.<root>) or a callable taking the
    request variables. Unrouted fields answer null. Every envelope is recorded.
    """

    def __init__(self):
        self.routes = {}
        self.errors = {}
        self.requests = []

    def on(self, root, value):
        self.routes[root] = value
        return self

    def fail(self, root, message):
        self.errors[root] = message
        return self

    def calls(self, root):
        return [variables for name, variables, _ in self.requests if name == root]

    def last(self, root):
        return self.calls(root)[-1]

    def query(self, root):
        return [text for name, _, text in self.requests if name == root][-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        envelope = json.loads(request.content)
        match = _ROOT_FIELD_RE.search(envelope["query"])
        root = match.group(1) if match else None
        variables = envelope.get("variables") or {}
        self.requests.append((root, variables, envelope["query"]))

        if root in self.errors:
            return httpx.Response(200, json={"data": None, "errors": [{"message": self.errors[root]}]})
        value = self.routes.get(root)
        if callable(value):
            value = value(variables)
        return httpx.Response(200, json={"data": {root: value}})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def transport(backend):
    client = GraphQLTransport(ENDPOINT, transport=httpx.MockTransport(backend))
    yield client
    client.close()


@pytest.fixture
def context():
    return RequestContext(school_id=1, user_id=7)
