"""Transport layer for the WebCRM API.

Key components:
- AuthStrategy: authentication abstraction (NoAuth, BasicAuth)
- RequestPolicy: timeouts, network retries, default headers
- HTTPClient: httpx wrapper with policy enforcement
- DummyRestApi: RestApi double without network calls
"""

from .base import (
    DEFAULT_POLICY,
    AuthStrategy,
    BasicAuth,
    NoAuth,
    RequestPolicy,
)
from .dummy import DummyResponse, DummyRestApi
from .http_client import HTTPClient, HTTPResponse

__all__ = [
    # Auth
    "AuthStrategy",
    "NoAuth",
    "BasicAuth",
    # Policy
    "RequestPolicy",
    "DEFAULT_POLICY",
    # HTTP
    "HTTPClient",
    "HTTPResponse",
    # Dummy
    "DummyRestApi",
    "DummyResponse",
]
