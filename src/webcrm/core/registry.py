"""Registry of resource classes keyed by their variant tag (`base_type`).

Resource modules register themselves at import time:

    ResourceRegistry.register("Contact", Contact)

The ItemEnumerator looks classes up here, so new variants can be added
without touching the batching logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Type

if TYPE_CHECKING:
    from webcrm.core.resource import BasicResource


class ResourceRegistry:
    """Mapping of base_type tag -> resource class (case-insensitive)."""

    _resources: Dict[str, Type[BasicResource]] = {}

    @classmethod
    def register(cls, base_type: str, resource_class: Type[BasicResource]) -> None:
        """Register a resource class for a base_type tag."""
        cls._resources[base_type.lower()] = resource_class

    @classmethod
    def unregister(cls, base_type: str) -> None:
        """Unregister a resource class (mainly for testing)."""
        cls._resources.pop(base_type.lower(), None)

    @classmethod
    def get(cls, base_type: str) -> Optional[Type[BasicResource]]:
        """Get the resource class for a tag, or None if unknown."""
        return cls._resources.get(base_type.lower())

    @classmethod
    def list_types(cls) -> List[str]:
        """List all registered tags (lowercased)."""
        return list(cls._resources.keys())

    @classmethod
    def is_registered(cls, base_type: str) -> bool:
        return base_type.lower() in cls._resources
