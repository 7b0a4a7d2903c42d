"""Accounts (organisations)."""

from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, MergeAndDeletable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource


class Account(Findable, Modifiable, ChangeLoggable, MergeAndDeletable, Searchable, Inspectable, BasicResource):
    """An organisation, usually the employer of contacts."""

    inspectable_fields = ("id", "name")


ResourceRegistry.register("Account", Account)
