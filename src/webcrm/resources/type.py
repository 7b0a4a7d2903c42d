"""Types: schema definitions for items of a base type."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, Modifiable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource

if TYPE_CHECKING:
    from webcrm.client import CrmClient


class Type(Findable, Modifiable, ChangeLoggable, Inspectable, BasicResource):
    """Defines the custom attributes of items of `item_base_type`."""

    inspectable_fields = ("id", "item_base_type")

    @classmethod
    def all(cls, client: "CrmClient") -> List["Type"]:
        """All types, including deleted ones."""
        return [cls(client, item) for item in client.api.get(cls.resource_path())]


ResourceRegistry.register("Type", Type)
