"""Typed, read-only attribute access for JSON payloads.

AttributeProvider adapts an arbitrary JSON object. Attributes are available
as `item["first_name"]`, `item.attribute("first_name")`, `item.attributes`
or `item.first_name`.

Keys ending in `_at` are decoded into timezone-aware UTC datetimes. The
original string stays available through `raw()`; an unparsable timestamp
decodes to None.

Reference resolution: `item.account` with no literal `account` attribute
but an `account_id` attribute fetches the referenced item through the
client's `find`. Likewise `item.contacts` resolves `contact_ids` into an
ItemEnumerator. A literal attribute always wins over an inferred reference,
and every access fetches afresh.
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from webcrm.config import ConfigurationError
from webcrm.core.inflection import pluralize, singularize

if TYPE_CHECKING:
    from webcrm.client import CrmClient

TIMESTAMP_SUFFIX = "_at"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into UTC. Returns None if unparsable."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class AttributeProvider:
    """Read-only attribute container with lazy reference resolution."""

    def __init__(self, client: Optional["CrmClient"] = None, attributes: Optional[Mapping[str, Any]] = None):
        self._client = client
        self._load_attributes(attributes or {})

    @property
    def client(self) -> Optional["CrmClient"]:
        return self._client

    @property
    def attributes(self) -> Mapping[str, Any]:
        """All decoded attributes (read-only)."""
        return self._attrs

    def attribute(self, name: str) -> Any:
        """Return the decoded value of `name`, or None if absent."""
        return self._attrs.get(str(name))

    def __getitem__(self, name: str) -> Any:
        return self.attribute(name)

    def raw(self, name: str) -> Any:
        """Return the value before decoding, falling back to the decoded value."""
        name = str(name)
        if name in self._raw_attrs:
            return self._raw_attrs[name]
        return self._attrs.get(name)

    def has_attribute(self, name: str) -> bool:
        return str(name) in self._attrs

    def reference(self, name: str) -> Any:
        """Fetch the item(s) referenced by `<name>_id` or `<singular name>_ids`.

        Returns a single resource for an `_id` attribute and an
        ItemEnumerator for an `_ids` attribute.

        Raises:
            AttributeError: if neither reference attribute exists
            ConfigurationError: if this object is not bound to a client
        """
        id_name = self._reference_key(name)
        if id_name is None:
            raise AttributeError(f"{type(self).__name__} has no reference '{name}'")
        if self._client is None:
            raise ConfigurationError(
                f"Cannot resolve '{name}': {type(self).__name__} is not bound to a client"
            )
        return self._client.find(self._attrs[id_name])

    def _reference_key(self, name: str) -> Optional[str]:
        for id_name in (f"{name}_id", f"{singularize(name)}_ids"):
            if id_name in self._attrs:
                return id_name
        return None

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        attrs = self.__dict__.get("_attrs")
        if attrs is None:
            raise AttributeError(name)
        if name in attrs:
            return attrs[name]
        if self._reference_key(name) is not None:
            return self.reference(name)
        raise AttributeError(f"{type(self).__name__} has no attribute '{name}'")

    def __dir__(self) -> List[str]:
        names = set(super().__dir__())
        for key in self._attrs:
            names.add(key)
            if key.endswith("_id"):
                names.add(key[: -len("_id")])
            elif key.endswith("_ids"):
                names.add(pluralize(key[: -len("_ids")]))
        return sorted(names)

    def _load_attributes(self, attributes: Mapping[str, Any]) -> "AttributeProvider":
        """Replace the attribute set wholesale with a decoded copy of `attributes`."""
        raw_attrs: Dict[str, Any] = {}
        attrs: Dict[str, Any] = {}
        for key, value in attributes.items():
            key = str(key)
            if key.endswith(TIMESTAMP_SUFFIX):
                raw_attrs[key] = value
                value = parse_timestamp(value)
            attrs[key] = value
        self._raw_attrs = MappingProxyType(raw_attrs)
        self._attrs = MappingProxyType(attrs)
        return self
