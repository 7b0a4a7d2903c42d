"""Events and their participants."""

from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource


class Event(Findable, Modifiable, ChangeLoggable, Searchable, Inspectable, BasicResource):
    """An event such as a conference or a webinar."""

    inspectable_fields = ("id", "title")


class EventContact(Findable, Modifiable, ChangeLoggable, Searchable, Inspectable, BasicResource):
    """Participation of a contact in an event.

    `event_contact.event` and `event_contact.contact` resolve the
    referenced items.
    """

    inspectable_fields = ("id",)


ResourceRegistry.register("Event", Event)
ResourceRegistry.register("EventContact", EventContact)
