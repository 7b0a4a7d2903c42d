"""Activities and their comments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from webcrm.core.attributes import AttributeProvider
from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource

if TYPE_CHECKING:
    from webcrm.client import CrmClient


class Activity(Findable, Modifiable, ChangeLoggable, Searchable, Inspectable, BasicResource):
    """A task, call, email or similar record, optionally with comments.

    To add a comment, pass `comment_notes` (and optionally
    `comment_attachments`) to create() or update(). Attachments may be
    upload IDs or readable file objects; files are uploaded first.
    """

    inspectable_fields = ("id", "title", "type_id")

    class Comment(AttributeProvider):
        """A comment on an activity; `attachments` is a list of Attachment."""

        class Attachment:
            """A file attached to a comment."""

            def __init__(self, client: Optional["CrmClient"], attachment_id: str):
                self._client = client
                self.id = attachment_id

            def download_url(self) -> str:
                """Signed, short-lived URL to download the file."""
                return self._client.attachment_store.generate_download_url(self.id)  # type: ignore[union-attr]

            def __eq__(self, other: object) -> bool:
                return isinstance(other, type(self)) and other.id == self.id

            def __hash__(self) -> int:
                return hash(self.id)

            def __repr__(self) -> str:
                return f"<Attachment id={self.id!r}>"

        def _load_attributes(self, attributes: Mapping[str, Any]) -> "Activity.Comment":
            comment = dict(attributes)
            comment["attachments"] = [
                Activity.Comment.Attachment(self._client, attachment_id)
                for attachment_id in comment.get("attachments") or []
            ]
            super()._load_attributes(comment)
            return self

        def is_published(self) -> bool:
            return bool(self.attribute("published"))

    @classmethod
    def create(cls, client: "CrmClient", attributes: Optional[Mapping[str, Any]] = None) -> "Activity":
        return super().create(client, cls.filter_attributes(client, attributes))

    def update(self, attributes: Optional[Mapping[str, Any]] = None) -> "Activity":
        return super().update(self.filter_attributes(self._require_client(), attributes))

    @staticmethod
    def filter_attributes(client: "CrmClient", attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Upload file objects in `comment_attachments`, keeping plain IDs."""
        filtered = dict(attributes or {})
        attachments = filtered.pop("comment_attachments", None)
        if attachments is not None:
            filtered["comment_attachments"] = [
                client.attachment_store.upload(a) if hasattr(a, "read") else a for a in attachments
            ]
        return filtered

    def _load_attributes(self, attributes: Mapping[str, Any]) -> "Activity":
        activity = dict(attributes)
        activity["comments"] = [
            Activity.Comment(self._client, comment) for comment in activity.get("comments") or []
        ]
        super()._load_attributes(activity)
        return self


ResourceRegistry.register("Activity", Activity)
