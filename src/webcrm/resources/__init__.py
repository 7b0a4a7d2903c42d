"""Concrete WebCRM resource types.

Importing this package registers every type with the ResourceRegistry.
"""

from webcrm.resources.account import Account
from webcrm.resources.activity import Activity
from webcrm.resources.collection import Collection
from webcrm.resources.contact import Contact
from webcrm.resources.event import Event, EventContact
from webcrm.resources.mailing import Mailing, MailingDelivery, MailingRecipient
from webcrm.resources.template_set import TemplateSet
from webcrm.resources.type import Type

__all__ = [
    "Account",
    "Activity",
    "Collection",
    "Contact",
    "Event",
    "EventContact",
    "Mailing",
    "MailingDelivery",
    "MailingRecipient",
    "TemplateSet",
    "Type",
]
