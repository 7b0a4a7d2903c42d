"""Test configuration and fixtures."""

from typing import Callable, List

import httpx
import pytest

from webcrm.client import CrmClient
from webcrm.connectors.dummy import DummyRestApi
from webcrm.core.rest_api import RestApi

ENDPOINT = "https://tenant.crm.example/api2/"

ENV_KEYS = ("WEBCRM_TENANT", "WEBCRM_ENDPOINT", "WEBCRM_LOGIN", "WEBCRM_API_KEY", "WEBCRM_LOG_LEVEL")


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def dummy_api():
    """DummyRestApi with no canned responses."""
    api = DummyRestApi()
    yield api
    api.close()


@pytest.fixture
def client(dummy_api):
    """Client talking to the dummy API."""
    return CrmClient(dummy_api)


@pytest.fixture
def make_rest_api():
    """Factory for a RestApi whose HTTP traffic goes to `handler`."""
    apis = []

    def factory(handler, policy=None):
        transport = RecordingTransport(handler)
        api = RestApi(ENDPOINT, "api_login", "secret-key", policy=policy, transport=transport)
        apis.append(api)
        return api, transport

    yield factory
    for api in apis:
        api.close()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove WEBCRM_* variables and run from an empty directory (no .env)."""
    for key in ENV_KEYS:
        # setenv first so values loaded from a .env file are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mget(dummy_api):
    """Serve `mget` from a dict of id -> payload; unknown IDs are omitted."""
    store = {}

    def handler(payload, headers):
        return [store[item_id] for item_id in dict.fromkeys(payload["ids"]) if item_id in store]

    dummy_api.set_response("GET", "mget", handler=handler)
    return store
