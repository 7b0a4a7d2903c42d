"""Behaviour shared by several resource types.

Resource classes compose these mixins with BasicResource, e.g.

    class Account(Findable, Modifiable, ChangeLoggable, MergeAndDeletable,
                  Searchable, Inspectable, BasicResource):
        inspectable_fields = ("id", "name")

Class-level operations take the client as their first argument.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from webcrm.core.attributes import AttributeProvider
from webcrm.core.search import SearchConfigurator, SearchSettings
from webcrm.errors import ResourceNotFound

if TYPE_CHECKING:
    from webcrm.client import CrmClient
    from webcrm.core.item_enumerator import ItemEnumerator

R = TypeVar("R")


class Inspectable:
    """repr() listing a configurable set of fields."""

    inspectable_fields: ClassVar[Tuple[str, ...]] = ("id",)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={self.attribute(name)!r}" for name in self.inspectable_fields)  # type: ignore[attr-defined]
        return f"<{type(self).__name__} {values}>"


class Findable:
    """Fetch a single item by id."""

    @classmethod
    def find(cls: Type[R], client: "CrmClient", item_id: Optional[str]) -> R:
        """Return the item with `item_id`.

        Raises:
            ResourceNotFound: if `item_id` is blank (no request is made) or
                the server does not know it
        """
        if not item_id:
            raise ResourceNotFound("Items could not be found.", [item_id])
        return cls(client, {"id": item_id}).reload()  # type: ignore[call-arg, attr-defined]


class Modifiable:
    """create / update / delete with optimistic locking.

    update() and delete() send the item's `version` as If-Match. If the item
    changed on the server in the meantime, ResourceConflict is raised and the
    local attributes stay as they were.
    """

    @classmethod
    def create(cls: Type[R], client: "CrmClient", attributes: Optional[Mapping[str, Any]] = None) -> R:
        return cls(client, client.api.post(cls.resource_path(), dict(attributes or {})))  # type: ignore[attr-defined, call-arg]

    def update(self, attributes: Optional[Mapping[str, Any]] = None) -> Any:
        """Update the item and load the server's new representation. Returns self."""
        return self._load_attributes(  # type: ignore[attr-defined]
            self._api().put(self.instance_path, dict(attributes or {}), self._if_match_header())  # type: ignore[attr-defined]
        )

    def delete(self) -> None:
        self._api().delete(self.instance_path, None, self._if_match_header())  # type: ignore[attr-defined]
        return None

    destroy = delete


class Change(AttributeProvider):
    """One entry of an item's change log.

    `details` maps attribute names to Change.Detail objects holding the
    `before` and `after` values.
    """

    class Detail(AttributeProvider):
        """Before/after values of one changed attribute."""

        pass

    def _load_attributes(self, attributes: Mapping[str, Any]) -> "Change":
        change = dict(attributes)
        change["details"] = {
            name: Change.Detail(self._client, detail) for name, detail in (change.get("details") or {}).items()
        }
        super()._load_attributes(change)
        return self


class ChangeLoggable:
    """Access to the change log of an item."""

    def changes(self, limit: int = 10) -> List[Change]:
        """The most recent changes, newest first (the server caps `limit` at 100)."""
        response = self._api().get(f"{self.instance_path}/changes", {"limit": limit})  # type: ignore[attr-defined]
        return [Change(self._client, change) for change in response["results"]]  # type: ignore[attr-defined]


class MergeAndDeletable:
    """Merge an item into another one and delete it."""

    def merge_and_delete(self, merge_into_id: str) -> None:
        self._api().post(f"{self.instance_path}/merge_and_delete", {"merge_into_id": merge_into_id})  # type: ignore[attr-defined]
        return None


class Searchable:
    """Searches restricted to the item's base type."""

    @classmethod
    def search_configurator(cls, client: "CrmClient") -> SearchConfigurator:
        return SearchConfigurator(client, SearchSettings(filters=cls._filters_for_base_type()))

    @classmethod
    def first(cls, client: "CrmClient") -> Any:
        """The oldest item of this type, or None."""
        return cls.search_configurator(client).sort_by("created_at").with_limit(1).perform_search().first()

    @classmethod
    def all(cls, client: "CrmClient") -> "ItemEnumerator":
        """All items of this type, oldest first."""
        return cls.search_configurator(client).sort_by("created_at").unlimited().perform_search()

    @classmethod
    def where(cls, client: "CrmClient", field: str, condition: str, value: Any = None) -> SearchConfigurator:
        return cls.search_configurator(client).add_filter(field, condition, value)

    @classmethod
    def where_not(cls, client: "CrmClient", field: str, condition: str, value: Any = None) -> SearchConfigurator:
        return cls.search_configurator(client).add_negated_filter(field, condition, value)

    @classmethod
    def query(cls, client: "CrmClient", query: str) -> SearchConfigurator:
        return cls.search_configurator(client).with_query(query)

    @classmethod
    def _filters_for_base_type(cls) -> List[Dict[str, Any]]:
        return [{"field": "base_type", "condition": "equals", "value": cls.base_type}]  # type: ignore[attr-defined]
