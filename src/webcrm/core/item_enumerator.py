"""Lazy, batched, order-preserving access to items identified by ID."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence

from webcrm.core.resource import BasicResource, build_resource
from webcrm.errors import ResourceNotFound

if TYPE_CHECKING:
    from webcrm.client import CrmClient

logger = logging.getLogger(__name__)

# Maximum number of IDs the server accepts per multi-get
BATCH_LIMIT = 100


class ItemEnumerator:
    """Sequence of items fetched on demand from an ID list.

    Iterating issues one `mget` request per batch of 100 IDs, and only when
    iteration reaches that batch; stopping early skips the remaining
    requests. Every iteration pass fetches afresh.

    `total` is the number of search hits when the enumerator is the result
    of a search, otherwise the number of IDs.
    """

    def __init__(self, client: "CrmClient", ids: Sequence[str], total: Optional[int] = None):
        self._client = client
        self._ids: List[str] = list(ids)
        self._total = len(self._ids) if total is None else total

    @property
    def ids(self) -> List[str]:
        """The IDs of the items to enumerate (a copy)."""
        return list(self._ids)

    @property
    def total(self) -> int:
        return self._total

    @property
    def length(self) -> int:
        """Number of IDs. Does not fetch anything."""
        return len(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[BasicResource]:
        for start in range(0, len(self._ids), BATCH_LIMIT):
            batch = self._ids[start:start + BATCH_LIMIT]
            yield from self._fetch_batch(batch)

    def first(self) -> Optional[BasicResource]:
        """The first item, fetching only the first batch. None if empty."""
        return next(iter(self), None)

    def to_list(self) -> List[BasicResource]:
        return list(self)

    def _fetch_batch(self, batch: List[str]) -> List[BasicResource]:
        logger.debug(f"Fetching batch of {len(batch)} items")
        payloads = self._client.api.get("mget", {"ids": batch}) or []

        by_id: Dict[Any, Dict[str, Any]] = {}
        for payload in payloads:
            by_id.setdefault(payload.get("id"), payload)

        missing = [item_id for item_id in batch if item_id not in by_id]
        if missing:
            raise ResourceNotFound("Items could not be found.", missing)

        # Reassemble in requested order; duplicates yield one item each
        return [build_resource(self._client, by_id[item_id]) for item_id in batch]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self.length}, total={self.total}>"
