"""The template set: the tenant's single set of email templates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from webcrm.core.mixins import ChangeLoggable, Inspectable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource

if TYPE_CHECKING:
    from webcrm.client import CrmClient


class TemplateSet(ChangeLoggable, Inspectable, BasicResource):
    """Singleton resource; its path carries no id."""

    inspectable_fields = ("id",)

    @classmethod
    def resource_path(cls) -> str:
        return cls.resource_name()

    @property
    def instance_path(self) -> str:
        return self.resource_path()

    @classmethod
    def singleton(cls, client: "CrmClient") -> "TemplateSet":
        return cls(client, {}).reload()

    def update(self, attributes: Mapping[str, Any]) -> "TemplateSet":
        self._load_attributes(self._api().put(self.instance_path, dict(attributes), self._if_match_header()))
        return self

    def render_preview(
        self,
        templates: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Render `templates` (name -> template) with `context`, without saving."""
        return self._api().post(
            f"{self.instance_path}/render_preview",
            {"templates": dict(templates or {}), "context": dict(context or {})},
        )


ResourceRegistry.register("TemplateSet", TemplateSet)
