"""REST boundary of the WebCRM client.

RestApi exposes get/put/post/delete on resource paths relative to the API
endpoint, decodes JSON responses, and translates non-2xx responses into the
typed errors of webcrm.errors using the server-supplied error id.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urljoin

import httpx

from webcrm.connectors.base import BasicAuth, RequestPolicy
from webcrm.connectors.http_client import HTTPClient, HTTPResponse
from webcrm.errors import (
    AuthenticationFailed,
    ClientError,
    CrmError,
    ForbiddenAccess,
    InvalidKeys,
    InvalidValues,
    ItemStatePreconditionFailed,
    RateLimitExceeded,
    ResourceConflict,
    ResourceNotFound,
    ServerError,
    TooManyParams,
    UnauthorizedAccess,
)

logger = logging.getLogger(__name__)

FILTERED_KEYS = frozenset({"password"})
FILTERED_VALUE = "[FILTERED]"

# Characters allowed unescaped in a path segment (RFC 3986 pchar), plus "/"
PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~"


def filter_sensitive(data: Any) -> Any:
    """Return a copy of `data` with password values masked, for logging."""
    if isinstance(data, dict):
        return {
            k: FILTERED_VALUE if str(k).lower() in FILTERED_KEYS else filter_sensitive(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [filter_sensitive(v) for v in data]
    return data


def escape_path(resource_path: str) -> str:
    """Percent-encode a resource path, e.g. an email address containing "#" or "?"."""
    return quote(resource_path, safe=PATH_SAFE_CHARS)


def _error_from_response(status_code: int, body: Any) -> CrmError:
    """Map an error response to the matching CrmError."""
    if not isinstance(body, dict):
        body = {"message": body}
    message = body.get("message") or ""
    error_id = body.get("id")

    if error_id == "unauthorized":
        return UnauthorizedAccess(message)
    if error_id == "authentication_failed":
        return AuthenticationFailed(message)
    if error_id == "forbidden":
        return ForbiddenAccess(message)
    if error_id == "not_found":
        return ResourceNotFound(message, body.get("missing_ids"))
    if error_id == "item_state_precondition_failed":
        return ItemStatePreconditionFailed(message, body.get("unmet_preconditions"))
    if error_id == "conflict":
        return ResourceConflict(message)
    if error_id == "invalid_keys":
        return InvalidKeys(message, body.get("validation_errors"))
    if error_id == "invalid_values":
        return InvalidValues(message, body.get("validation_errors"))
    if error_id == "rate_limit":
        return RateLimitExceeded(message)
    if error_id == "internal_server_error":
        return ServerError(message)
    if error_id == "too_many_params":
        return TooManyParams(message)

    if status_code == 404:
        return ResourceNotFound("Not Found.")
    if 400 <= status_code < 500:
        return ClientError(f"HTTP Code {status_code}: {body}", {"status_code": status_code})
    return ServerError(f"HTTP Code {status_code}: {body}", {"status_code": status_code})


class RestApi:
    """Authenticated JSON API bound to one endpoint.

    Network failures are retried once for GET, PUT and DELETE; POST is
    never retried. Write calls may pass an If-Match header; a version
    mismatch comes back as ResourceConflict.
    """

    def __init__(
        self,
        endpoint_url: str,
        login: str,
        api_key: str,
        policy: Optional[RequestPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint_url = endpoint_url if endpoint_url.endswith("/") else endpoint_url + "/"
        self.login = login
        self.http = HTTPClient(
            base_url=self.endpoint_url,
            auth=BasicAuth(username=login, password=api_key),
            policy=policy,
            transport=transport,
        )

    def get(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._response_for_request("GET", resource_path, payload, headers)

    def put(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._response_for_request("PUT", resource_path, payload, headers)

    def post(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._response_for_request("POST", resource_path, payload, headers)

    def delete(self, resource_path: str, payload: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._response_for_request("DELETE", resource_path, payload, headers)

    def resolve_uri(self, url: str) -> str:
        """Resolve a (possibly relative) URL against the endpoint."""
        return urljoin(self.endpoint_url, url)

    def close(self) -> None:
        self.http.close()

    def _response_for_request(
        self,
        method: str,
        resource_path: str,
        payload: Any,
        headers: Optional[Dict[str, str]],
    ) -> Any:
        resource_path = escape_path(resource_path)
        logger.info(f"{method} {resource_path}")
        if payload:
            logger.debug(f"  request body: {filter_sensitive(payload)}")

        response = self.http.request(method, resource_path, json=payload, headers=headers)

        logger.info(
            f"  {response.status_code} {response.reason_phrase} {len(response.body)} "
            f"(total: {response.elapsed_seconds * 1000:.1f}ms)"
        )
        return self._handle_response(response)

    def _handle_response(self, response: HTTPResponse) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise ServerError(f"Server returned invalid json: {response.text}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"  response body: {filter_sensitive(body)}")

        if response.ok:
            return body
        raise _error_from_response(response.status_code, body)
