"""Collections: saved searches whose results can be computed on the server."""

from __future__ import annotations

from typing import List

from webcrm.core.item_enumerator import ItemEnumerator
from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource


class Collection(Findable, Modifiable, ChangeLoggable, Searchable, Inspectable, BasicResource):
    """A saved set of filters over one base type."""

    inspectable_fields = ("id", "title")

    def compute(self) -> "Collection":
        """Compute the collection's output on the server and reload."""
        self._load_attributes(self._api().put(f"{self.instance_path}/compute", {}))
        return self

    def output_ids(self) -> List[str]:
        """IDs of the items of the last computation."""
        return self._api().get(f"{self.instance_path}/output_ids")

    def output_items(self) -> ItemEnumerator:
        return ItemEnumerator(self._require_client(), self.output_ids())


ResourceRegistry.register("Collection", Collection)
