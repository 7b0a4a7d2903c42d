"""HTTP client wrapper with network-retry support.

Wraps httpx with RequestPolicy enforcement:
- Per-request timeouts
- A single retry on network failure for idempotent methods
- httpx transport exceptions mapped to NetworkError

HTTP status handling is left to the caller (see webcrm.core.rest_api).
Tests inject an httpx.MockTransport through the `transport` argument.
"""

import json as json_module
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from webcrm.errors import NetworkError

from .base import DEFAULT_POLICY, AuthStrategy, NoAuth, RequestPolicy

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """Simplified HTTP response wrapper."""

    status_code: int
    reason_phrase: str
    body: bytes
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse the body as JSON. An empty body decodes to None."""
        if not self.body.strip():
            return None
        return json_module.loads(self.body)


class HTTPClient:
    """HTTP client bound to one base URL.

    Keeps a single httpx.Client (connection pool) open until close().
    """

    def __init__(
        self,
        base_url: str = "",
        auth: Optional[AuthStrategy] = None,
        policy: Optional[RequestPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url
        self.auth = auth or NoAuth()
        self.policy = policy or DEFAULT_POLICY
        self.transport = transport
        self._client: Optional[httpx.Client] = None

    def _build_headers(
        self,
        extra_headers: Optional[Dict[str, str]] = None,
        multipart: bool = False,
    ) -> Dict[str, str]:
        """Build request headers including auth and defaults."""
        headers = {"User-Agent": self.policy.user_agent}
        if not multipart:
            headers.update(self.policy.default_headers)
        headers.update(self.auth.get_headers())
        if extra_headers:
            headers.update({k: v for k, v in extra_headers.items() if v is not None})
        return headers

    def _get_url(self, path: str) -> str:
        """Build full URL from path."""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            timeout = httpx.Timeout(
                connect=self.policy.connect_timeout,
                read=self.policy.read_timeout,
                write=self.policy.read_timeout,
                pool=self.policy.connect_timeout,
            )
            self._client = httpx.Client(timeout=timeout, transport=self.transport)
        return self._client

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HTTPResponse:
        """Make an HTTP request, retrying network failures per policy.

        Args:
            method: HTTP method (GET, PUT, POST, DELETE)
            path: URL path (relative to base_url) or absolute URL
            json: JSON body to send (for every method, GET included)
            data: Form fields to send
            files: Multipart files to send
            headers: Additional headers

        Returns:
            HTTPResponse, whatever its status code

        Raises:
            NetworkError: when the transport fails after all allowed attempts
        """
        url = self._get_url(path)
        request_headers = self._build_headers(headers, multipart=files is not None)
        content = None
        if json is not None:
            content = json_module.dumps(json).encode("utf-8")

        retries = self.policy.retries_for(method)
        for attempt in range(retries + 1):
            start_time = time.monotonic()
            try:
                response = self._get_client().request(
                    method=method,
                    url=url,
                    content=content,
                    data=data,
                    files=files,
                    headers=request_headers,
                )
            except httpx.TransportError as e:
                if attempt < retries:
                    logger.debug(f"Network error on {method} {url} (attempt {attempt + 1}): {e}")
                    continue
                raise NetworkError(str(e) or type(e).__name__, e) from e

            return HTTPResponse(
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
                body=response.content,
                elapsed_seconds=time.monotonic() - start_time,
            )

        # range() above always runs at least once
        raise NetworkError(f"Request failed: {method} {url}")

    def close(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None
