"""Core of the WebCRM client.

- AttributeProvider / BasicResource: typed access to JSON payloads
- ResourceRegistry: base_type tag -> resource class
- ItemEnumerator: batched, order-preserving multi-ID fetch
- SearchConfigurator / search: paginated search
- RestApi: JSON API boundary with error translation
- AttachmentStore: blob store for comment attachments
"""

from webcrm.core.attachment_store import AttachmentStore, Permission
from webcrm.core.attributes import AttributeProvider
from webcrm.core.item_enumerator import BATCH_LIMIT, ItemEnumerator
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource, GenericResource, build_resource
from webcrm.core.rest_api import RestApi
from webcrm.core.search import SERVER_LIMIT, SearchConfigurator, SearchFilter, SearchSettings, search

__all__ = [
    "AttachmentStore",
    "Permission",
    "AttributeProvider",
    "BATCH_LIMIT",
    "ItemEnumerator",
    "ResourceRegistry",
    "BasicResource",
    "GenericResource",
    "build_resource",
    "RestApi",
    "SERVER_LIMIT",
    "SearchConfigurator",
    "SearchFilter",
    "SearchSettings",
    "search",
]
