"""Transport-level abstractions for talking to the WebCRM API.

- AuthStrategy: authentication method abstraction (API login + key)
- RequestPolicy: timeouts, network retries, default headers
"""

import base64
from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from webcrm.versioning import PACKAGE_VERSION

# =============================================================================
# Authentication Strategies
# =============================================================================


@dataclass
class AuthStrategy:
    """Base authentication strategy. Subclasses supply the headers."""

    def is_configured(self) -> bool:
        """Check if authentication is properly configured."""
        return True

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        return {}


@dataclass
class NoAuth(AuthStrategy):
    """No authentication (used for pre-signed upload URLs)."""


@dataclass
class BasicAuth(AuthStrategy):
    """HTTP basic authentication with the API login and API key."""

    username: str = ""
    password: str = ""

    def is_configured(self) -> bool:
        """Check if credentials are set."""
        return bool(self.username and self.password)

    def get_headers(self) -> Dict[str, str]:
        """Get the Authorization header."""
        if not self.is_configured():
            return {}
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}


# =============================================================================
# Request Policy
# =============================================================================


@dataclass
class RequestPolicy:
    """Policy for HTTP requests: timeouts, retries, headers.

    Only network-level failures are retried, and only for idempotent
    methods. HTTP error statuses are never retried.
    """

    # Timeouts (seconds)
    connect_timeout: float = 25.0
    read_timeout: float = 25.0

    # Retries
    max_network_retries: int = 1
    idempotent_methods: FrozenSet[str] = frozenset({"GET", "PUT", "DELETE"})

    # Headers
    user_agent: str = f"webcrm/{PACKAGE_VERSION}"
    default_headers: Dict[str, str] = field(
        default_factory=lambda: {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
    )

    def retries_for(self, method: str) -> int:
        """Number of network retries allowed for an HTTP method."""
        if method.upper() in self.idempotent_methods:
            return self.max_network_retries
        return 0


DEFAULT_POLICY = RequestPolicy()
