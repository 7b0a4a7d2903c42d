"""Error hierarchy of the WebCRM client.

All errors raised by the library derive from CrmError:
- NetworkError: transport-level failure (no HTTP response)
- ServerError: 5xx, unknown status, or an unparsable response body
- ClientError: 4xx-driven errors, refined by the server's error id

Every error carries a `details` dict for structured logging.
"""

from typing import Any, Dict, List, Optional


class CrmError(Exception):
    """Base exception for all WebCRM client errors."""

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None):
        self.details = details or {}
        super().__init__(message)


class ServerError(CrmError):
    """An internal error occurred in the API server."""

    pass


class NetworkError(CrmError):
    """A non-recoverable network error occurred (e.g. connection timeout)."""

    def __init__(self, message: str = "", cause: Optional[BaseException] = None):
        super().__init__(message, {"cause": repr(cause) if cause else None})
        self.cause = cause


class ClientError(CrmError):
    """Superclass of all errors caused by client-supplied input."""

    pass


class UnauthorizedAccess(ClientError):
    """The API user credentials are invalid."""

    pass


class AuthenticationFailed(ClientError):
    """The credentials passed to Contact.authenticate_or_raise are invalid."""

    pass


class ForbiddenAccess(ClientError):
    """The API user is not permitted to access the resource."""

    pass


class TooManyParams(ClientError):
    """Too many keys were passed to a create or update request."""

    pass


class RateLimitExceeded(ClientError):
    """Too many requests were issued within a given time frame."""

    pass


class ResourceConflict(ClientError):
    """The item has been changed concurrently.

    Reload the item, review the changes and retry.
    """

    pass


class ResourceNotFound(ClientError):
    """The requested IDs could not be found."""

    def __init__(self, message: str = "", missing_ids: Optional[List[Any]] = None):
        self.missing_ids = list(missing_ids or [])
        listed = ", ".join(str(i) for i in self.missing_ids)
        super().__init__(
            f"{message} Missing IDs: {listed}".strip(),
            {"missing_ids": self.missing_ids},
        )


class ItemStatePreconditionFailed(ClientError):
    """One or more preconditions of the attempted action were not met.

    For example, a deleted item cannot be updated before it is undeleted.
    `unmet_preconditions` is a list of {"code", "message"} dicts.
    """

    def __init__(self, message: str = "", unmet_preconditions: Optional[List[Dict[str, Any]]] = None):
        self.unmet_preconditions = list(unmet_preconditions or [])
        parts = [message] + [p.get("message", "") for p in self.unmet_preconditions]
        super().__init__(
            " ".join(p for p in parts if p),
            {"unmet_preconditions": self.unmet_preconditions},
        )


class _ValidationFailed(ClientError):
    def __init__(self, message: str = "", validation_errors: Optional[List[Dict[str, Any]]] = None):
        self.validation_errors = list(validation_errors or [])
        listed = ", ".join(e.get("message", "") for e in self.validation_errors)
        super().__init__(
            f"{message} {listed}.".strip(),
            {"validation_errors": self.validation_errors},
        )


class InvalidKeys(_ValidationFailed):
    """A create or update request contains unknown attributes.

    `validation_errors` items look like
    {"attribute": "foo", "code": "unknown", "message": "foo is unknown"}.
    """

    pass


class InvalidValues(_ValidationFailed):
    """A create or update request has known keys with incorrect values.

    `validation_errors` items look like
    {"attribute": "name", "code": "blank", "message": "name is blank"}.
    """

    pass
