"""Base class of all WebCRM resources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Dict, Mapping, Optional

from webcrm.config import ConfigurationError
from webcrm.core.attributes import AttributeProvider
from webcrm.core.inflection import pluralize, underscore
from webcrm.core.registry import ResourceRegistry

if TYPE_CHECKING:
    from webcrm.client import CrmClient
    from webcrm.core.rest_api import RestApi


class BasicResource(AttributeProvider):
    """An identified remote item with a variant tag and an attribute set.

    The attribute set is only ever replaced wholesale: reload() and every
    write operation load the server's post-write representation.

    Two resources are equal if they have the same concrete class and id.
    """

    base_type: ClassVar[str] = "BasicResource"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "base_type" not in cls.__dict__:
            cls.base_type = cls.__name__

    def __init__(self, client: Optional["CrmClient"] = None, attributes: Optional[Mapping[str, Any]] = None):
        super().__init__(client, attributes)

    @classmethod
    def resource_name(cls) -> str:
        return underscore(cls.base_type)

    @classmethod
    def resource_path(cls) -> str:
        """Collection path of this resource type, e.g. "event_contacts"."""
        return pluralize(cls.resource_name())

    @property
    def id(self) -> Optional[str]:
        return self.attribute("id")

    @property
    def instance_path(self) -> str:
        """`resource_path/id`, or just `resource_path` before creation."""
        if self.id is None:
            return self.resource_path()
        return f"{self.resource_path()}/{self.id}"

    @property
    def type(self) -> Any:
        """The Type item describing this item (fetched on every access)."""
        from webcrm.resources.type import Type

        return Type.find(self._require_client(), self.attribute("type_id"))

    def reload(self) -> "BasicResource":
        """Reload the attributes of this item from the server and return self."""
        self._load_attributes(self._api().get(self.instance_path))
        return self

    def _require_client(self) -> "CrmClient":
        if self._client is None:
            raise ConfigurationError(f"{type(self).__name__} is not bound to a client")
        return self._client

    def _api(self) -> "RestApi":
        return self._require_client().api

    def _if_match_header(self) -> Dict[str, Any]:
        return {"If-Match": self.attribute("version")}

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        return type(other) is type(self) and other.id == self.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


class GenericResource(BasicResource):
    """Fallback for payloads whose base_type has no registered class.

    Keeps the payload's tag, so equality also compares the tag.
    """

    @property
    def tag(self) -> Optional[str]:
        return self.attribute("base_type")

    @property
    def instance_path(self) -> str:
        base = pluralize(underscore(self.tag or self.base_type))
        return base if self.id is None else f"{base}/{self.id}"

    def __eq__(self, other: object) -> bool:
        return super().__eq__(other) and other.tag == self.tag  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} base_type={self.tag!r} id={self.id!r}>"


def build_resource(client: Optional["CrmClient"], payload: Mapping[str, Any]) -> BasicResource:
    """Instantiate the resource class selected by the payload's base_type."""
    resource_class = ResourceRegistry.get(str(payload.get("base_type") or ""))
    if resource_class is None:
        resource_class = GenericResource
    return resource_class(client, payload)
