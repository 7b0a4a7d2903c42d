"""In-memory stand-in for RestApi.

DummyRestApi answers get/put/post/delete from canned responses without
any network traffic. Used for:
- Unit tests of everything above the transport
- Development without a CRM tenant

Responses are registered per (method, path) and can be plain data, an
error to raise, or a handler computing the data from the payload.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urljoin

import httpx

from webcrm.errors import CrmError

from .http_client import HTTPClient

Handler = Callable[[Any, Dict[str, Any]], Any]


@dataclass
class DummyResponse:
    """Canned response for DummyRestApi."""

    data: Any = None
    error: Optional[CrmError] = None
    handler: Optional[Handler] = None


class DummyRestApi:
    """RestApi double that records every call."""

    def __init__(
        self,
        endpoint_url: str = "https://dummy.crm.example/api2/",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize dummy API.

        Args:
            endpoint_url: Base URL used by resolve_uri()
            transport: httpx transport for direct HTTP (attachment uploads)
        """
        self.endpoint_url = endpoint_url
        self.http = HTTPClient(base_url=endpoint_url, transport=transport)
        self._responses: Dict[Tuple[str, str], DummyResponse] = {}
        self._call_log: List[Dict[str, Any]] = []

    def set_response(
        self,
        method: str,
        path: str,
        data: Any = None,
        error: Optional[CrmError] = None,
        handler: Optional[Handler] = None,
    ) -> None:
        """Set the canned response for a method and path.

        Args:
            method: HTTP method ("GET", "PUT", "POST", "DELETE")
            path: Resource path, e.g. "contacts/abc"
            data: Data to return
            error: Error to raise instead
            handler: Callable (payload, headers) -> data, wins over `data`
        """
        self._responses[(method.upper(), path)] = DummyResponse(data=data, error=error, handler=handler)

    def clear_responses(self) -> None:
        self._responses.clear()

    def get(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, Any]] = None) -> Any:
        return self._call("GET", resource_path, payload, headers)

    def put(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, Any]] = None) -> Any:
        return self._call("PUT", resource_path, payload, headers)

    def post(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, Any]] = None) -> Any:
        return self._call("POST", resource_path, payload, headers)

    def delete(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, Any]] = None) -> Any:
        return self._call("DELETE", resource_path, payload, headers)

    def resolve_uri(self, url: str) -> str:
        return urljoin(self.endpoint_url, url)

    def close(self) -> None:
        self.http.close()

    def _call(self, method: str, path: str, payload: Any, headers: Optional[Dict[str, Any]]) -> Any:
        self._call_log.append({
            "method": method,
            "path": path,
            "payload": copy.deepcopy(payload),
            "headers": dict(headers or {}),
        })

        response = self._responses.get((method, path))
        if response is None:
            raise KeyError(f"No dummy response for {method} {path}")
        if response.error is not None:
            raise response.error
        if response.handler is not None:
            return response.handler(payload, dict(headers or {}))
        return copy.deepcopy(response.data)

    # -------------------------------------------------------------------------
    # Assertions helpers
    # -------------------------------------------------------------------------

    def get_call_log(self) -> List[Dict[str, Any]]:
        """Get log of all calls."""
        return list(self._call_log)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[Dict[str, Any]]:
        """Logged calls, filtered by method and/or path."""
        return [
            call for call in self._call_log
            if (method is None or call["method"] == method.upper())
            and (path is None or call["path"] == path)
        ]

    def call_count(self, method: Optional[str] = None, path: Optional[str] = None) -> int:
        return len(self.calls(method, path))

    def was_called(self, method: str, path: str) -> bool:
        return self.call_count(method, path) > 0

    def clear_call_log(self) -> None:
        self._call_log.clear()
