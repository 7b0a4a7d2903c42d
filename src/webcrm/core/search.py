"""Search configuration and the paginated search primitive.

The server returns at most 100 hits per request. `search()` loops over
pages until the requested limit is satisfied or no more hits remain beyond
the initial offset, and returns an ItemEnumerator over the collected IDs.

SearchConfigurator builds the search parameters immutably:

    config = (
        Contact.where(client, "last_name", "equals", "Johnson")
        .and_("locality", "equals", "New York")
        .and_not("language", "equals", "en")
        .sort_by("first_name")
        .descending()
        .with_offset(1)
        .with_limit(3)
    )
    results = config.perform_search()
    results.length  # => 3
    results.total   # => 17
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webcrm.core.item_enumerator import ItemEnumerator

if TYPE_CHECKING:
    from webcrm.client import CrmClient
    from webcrm.core.resource import BasicResource

logger = logging.getLogger(__name__)

# Maximum number of hits the server returns per search request
SERVER_LIMIT = 100

# Accepted spellings of "no limit"
UNLIMITED = "none"

LimitType = Union[int, float, str, None]


def _normalize_limit(value: Any) -> Optional[int]:
    """None, "none" and infinity mean unlimited; otherwise an int >= 0."""
    if value is None or value == UNLIMITED:
        return None
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


class SearchFilter(BaseModel):
    """One filter expression. Filters of a search are ANDed."""

    model_config = ConfigDict(frozen=True)

    field: str
    condition: str
    value: Any = None

    def to_payload(self) -> Dict[str, Any]:
        return {"field": self.field, "condition": self.condition, "value": self.value}


class SearchSettings(BaseModel):
    """Immutable snapshot of all search parameters."""

    model_config = ConfigDict(frozen=True)

    filters: Tuple[SearchFilter, ...] = ()
    query: Optional[str] = None
    limit: Optional[int] = Field(None, ge=0)
    offset: int = Field(0, ge=0)
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None

    @field_validator("limit", mode="before")
    @classmethod
    def _unlimited(cls, value: Any) -> Optional[int]:
        return _normalize_limit(value)

    @field_validator("offset", mode="before")
    @classmethod
    def _default_offset(cls, value: Any) -> Any:
        return 0 if value is None else value

    def replace(self, **changes: Any) -> "SearchSettings":
        """Validated copy with `changes` applied."""
        data = {
            "filters": self.filters,
            "query": self.query,
            "limit": self.limit,
            "offset": self.offset,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
        }
        data.update(changes)
        return SearchSettings(**data)


def search(
    client: "CrmClient",
    filters: Optional[Sequence[Union[SearchFilter, Dict[str, Any]]]] = None,
    query: Optional[str] = None,
    limit: LimitType = None,
    offset: Optional[int] = 0,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> ItemEnumerator:
    """Perform a search and return an enumerator over the hits.

    Only IDs are retrieved here; the items are fetched when the enumerator
    is iterated.

    The first page is always requested, even with `limit=0` (sent as
    `"limit": 0`), so that `total` is known. Later pages are only requested
    while hits are still missing.

    Args:
        client: Client to send the requests through
        filters: {field, condition, value} filters, ANDed
        query: Full-text, case-insensitive prefix search term
        limit: Maximum number of hits; None or "none" for no limit
        offset: Number of hits to skip
        sort_by: Attribute to sort by (server default: created_at)
        sort_order: "asc" or "desc"

    Returns:
        ItemEnumerator whose `total` is the server's hit count
    """
    settings = SearchSettings(
        filters=tuple(f if isinstance(f, SearchFilter) else SearchFilter(**f) for f in filters or ()),
        query=query,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    remaining = math.inf if settings.limit is None else settings.limit
    current_offset = settings.offset
    initial_offset = settings.offset

    ids: List[str] = []
    total: Optional[int] = None

    while True:
        params: Dict[str, Any] = {
            "filters": [f.to_payload() for f in settings.filters] if filters is not None else None,
            "query": settings.query,
            "limit": int(min(remaining, SERVER_LIMIT)),
            "offset": current_offset,
            "sort_by": settings.sort_by,
            "sort_order": settings.sort_order,
        }
        params = {k: v for k, v in params.items() if v is not None}
        response = client.api.post("search", params)

        results = response.get("results") or []
        ids.extend(r["id"] for r in results)
        if total is None:
            # The first page's total is authoritative for the whole loop
            total = response.get("total", 0)

        target = min(settings.limit if settings.limit is not None else math.inf, max(total - initial_offset, 0))
        if len(ids) >= target or not results:
            break

        remaining -= SERVER_LIMIT
        current_offset += SERVER_LIMIT
        if remaining <= 0:
            break

    logger.debug(f"Search collected {len(ids)} of {total} hits")
    return ItemEnumerator(client, ids, total=total)


class SearchConfigurator:
    """Chainable, immutable search configuration.

    Every chainable method returns a new configurator; the receiver is left
    untouched. perform_search() runs the search once per configurator
    instance and caches the resulting enumerator.
    """

    def __init__(self, client: "CrmClient", settings: Optional[SearchSettings] = None):
        self._client = client
        self._settings = settings or SearchSettings()
        self._result: Optional[ItemEnumerator] = None

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    def _with(self, **changes: Any) -> "SearchConfigurator":
        return SearchConfigurator(self._client, self._settings.replace(**changes))

    def perform_search(self) -> ItemEnumerator:
        """Execute the search (at most once per instance) and return its result."""
        if self._result is None:
            s = self._settings
            self._result = search(
                self._client,
                filters=list(s.filters),
                query=s.query,
                limit=s.limit,
                offset=s.offset,
                sort_by=s.sort_by,
                sort_order=s.sort_order,
            )
        return self._result

    # -------------------------------------------------------------------------
    # Chainable methods
    # -------------------------------------------------------------------------

    def add_filter(self, field: str, condition: str, value: Any = None) -> "SearchConfigurator":
        """Add a filter.

        Supported conditions include contains_word_prefixes, contains_words,
        equals (case-insensitive), is_blank, is_earlier_than, is_later_than
        and is_true. `value` is omitted for is_blank and is_true.
        """
        new_filter = SearchFilter(field=str(field), condition=str(condition), value=value)
        return self._with(filters=self._settings.filters + (new_filter,))

    and_ = add_filter

    def add_negated_filter(self, field: str, condition: str, value: Any = None) -> "SearchConfigurator":
        """Add a filter whose condition is negated ("equals" -> "not_equals")."""
        return self.add_filter(field, f"not_{condition}", value)

    and_not = add_negated_filter

    def with_query(self, query: str) -> "SearchConfigurator":
        return self._with(query=query)

    def with_limit(self, limit: LimitType) -> "SearchConfigurator":
        return self._with(limit=limit)

    def unlimited(self) -> "SearchConfigurator":
        return self.with_limit(None)

    def with_offset(self, offset: int) -> "SearchConfigurator":
        return self._with(offset=offset)

    def sort_by(self, sort_by: str) -> "SearchConfigurator":
        return self._with(sort_by=sort_by)

    def sort_order(self, sort_order: str) -> "SearchConfigurator":
        return self._with(sort_order=sort_order)

    def ascending(self) -> "SearchConfigurator":
        return self.sort_order("asc")

    def descending(self) -> "SearchConfigurator":
        return self.sort_order("desc")

    # -------------------------------------------------------------------------
    # Result access
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator["BasicResource"]:
        return iter(self.perform_search())

    def take(self, n: int) -> List["BasicResource"]:
        """The first `n` hits, as a list."""
        return list(self.with_limit(n).perform_search())

    def first(self, n: Optional[int] = None) -> Any:
        """The first hit (or None), or a list of the first `n` hits."""
        if n is not None:
            return self.take(n)
        return self.with_limit(1).perform_search().first()

    @property
    def total(self) -> int:
        """Number of items matching this configuration; may exceed the limit."""
        return self.perform_search().total

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._settings!r}>"
