"""Client context object: the entry point of the library.

    client = webcrm.configure(tenant="my_tenant", login="me", api_key="secret")
    contact = client.find("e70a7123f499c5e0e9972ab4dbfb8fe3")
    johnsons = client.search(filters=[{"field": "last_name", "condition": "equals", "value": "Johnson"}])

Everything that talks to the server takes a CrmClient explicitly; there is
no module-level connection state. Configure once, then use the client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

import webcrm.resources  # noqa: F401  (registers the resource classes)
from webcrm.config import Configuration
from webcrm.connectors.base import RequestPolicy
from webcrm.core.attachment_store import AttachmentStore
from webcrm.core.item_enumerator import ItemEnumerator
from webcrm.core.resource import BasicResource
from webcrm.core.rest_api import RestApi
from webcrm.core.search import LimitType, SearchFilter
from webcrm.core.search import search as _search
from webcrm.errors import ResourceNotFound

logger = logging.getLogger(__name__)


class CrmClient:
    """Holds the API connection and exposes the top-level operations."""

    def __init__(self, api: Any):
        self.api = api
        self.attachment_store = AttachmentStore(self)

    def find(self, *ids: Union[Optional[str], Sequence[Optional[str]]]) -> Union[BasicResource, ItemEnumerator, None]:
        """Fetch items by ID; base types may be mixed.

        find("abc") returns a single item; find("abc", "def") and
        find(["abc", "def"]) return an ItemEnumerator.

        Raises:
            ResourceNotFound: if no ID is given (without a request), or if
                one of the IDs is unknown (when iterating)
        """
        flattened: List[Optional[str]] = []
        for item in ids:
            if isinstance(item, (list, tuple)):
                flattened.extend(item)
            else:
                flattened.append(item)

        if not any(flattened):
            raise ResourceNotFound("Items could not be found.", flattened)

        enumerator = ItemEnumerator(self, flattened)
        if len(ids) == 1 and not isinstance(ids[0], (list, tuple)):
            return enumerator.first()
        return enumerator

    def search(
        self,
        filters: Optional[Sequence[Union[SearchFilter, Dict[str, Any]]]] = None,
        query: Optional[str] = None,
        limit: LimitType = None,
        offset: int = 0,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> ItemEnumerator:
        """Search across all base types. See webcrm.core.search.search."""
        return _search(
            self,
            filters=filters,
            query=query,
            limit=limit,
            offset=offset,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    def close(self) -> None:
        close = getattr(self.api, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "CrmClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def configure(
    tenant: Optional[str] = None,
    login: Optional[str] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    policy: Optional[RequestPolicy] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> CrmClient:
    """Validate the credentials and return a ready client.

    Raises:
        ConfigurationError: naming the first missing key (api_key, then
            login, then tenant); nothing is sent to the server
    """
    config = Configuration(tenant=tenant, login=login, api_key=api_key, endpoint=endpoint)
    return from_configuration(config, policy=policy, transport=transport)


def from_configuration(
    config: Configuration,
    policy: Optional[RequestPolicy] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> CrmClient:
    """Build a client from a Configuration (e.g. Configuration.from_env())."""
    config.validate()
    logger.debug(f"Configuring client for {config.endpoint_url}")
    api = RestApi(config.endpoint_url, config.login, config.api_key, policy=policy, transport=transport)
    return CrmClient(api)
