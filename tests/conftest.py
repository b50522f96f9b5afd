"""Pytest fixtures for the Comgate client tests."""

import json

import pytest
import requests

from comgate_api.core.config import reset_configuration

_ENV_KEYS = (
    "COMGATE_MERCHANT_ID",
    "COMGATE_SECRET",
    "COMGATE_BASE_URL",
    "COMGATE_TIMEOUT",
    "COMGATE_OPEN_TIMEOUT",
    "COMGATE_TEST",
    "COMGATE_METHODS",
)


class FakeSession:
    """Stands in for ``requests.Session``, answering from registered routes."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, method, url, status=200, body=None):
        if not isinstance(body, str):
            body = json.dumps(body)
        self.routes[(method, url)] = (status, body)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        status, body = self.routes[(method, url)]
        response = requests.Response()
        response.status_code = status
        response._content = body.encode("utf-8")
        response.encoding = "utf-8"
        response.url = url
        return response

    def close(self):
        self.closed = True

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep COMGATE_* variables and the process-wide default out of every test."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def valid_payment():
    return {
        "price": 10000,
        "curr": "CZK",
        "label": "Test",
        "ref_id": "order-123",
        "email": "test@example.com",
    }
