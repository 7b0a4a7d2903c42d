"""Mailings, their recipients and their deliveries."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from webcrm.core.attributes import AttributeProvider
from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource
from webcrm.errors import ResourceNotFound

if TYPE_CHECKING:
    from webcrm.client import CrmClient
    from webcrm.core.rest_api import RestApi


def _extract_id(contact_or_id: Any) -> Any:
    return getattr(contact_or_id, "id", contact_or_id)


class Mailing(Findable, Modifiable, ChangeLoggable, Searchable, Inspectable, BasicResource):
    """An email newsletter sent to the contacts of a collection."""

    inspectable_fields = ("id", "title")

    def render_preview(self, render_for_contact_or_id: Any) -> Dict[str, Any]:
        """Render the mailing as `render_for_contact_or_id` would receive it.

        Returns a dict with the rendered `email_from`, `email_reply_to`,
        `email_subject`, `text_body` and `html_body`.
        """
        return self._api().post(
            f"{self.instance_path}/render_preview",
            {"render_for_contact_id": _extract_id(render_for_contact_or_id)},
        )

    def send_me_a_proof_email(self, render_for_contact_or_id: Any) -> Dict[str, Any]:
        """Send a proof email, rendered for a contact, to the API user."""
        return self._api().post(
            f"{self.instance_path}/send_me_a_proof_email",
            {"render_for_contact_id": _extract_id(render_for_contact_or_id)},
        )

    def send_single_email(self, recipient_contact_or_id: Any) -> Dict[str, Any]:
        """Send the released mailing to one (additional) recipient."""
        return self._api().post(
            f"{self.instance_path}/send_single_email",
            {"recipient_contact_id": _extract_id(recipient_contact_or_id)},
        )

    def release(self) -> "Mailing":
        """Release the mailing for sending and reload."""
        self._load_attributes(self._api().post(f"{self.instance_path}/release", {}))
        return self


class MailingRecipient(Inspectable, BasicResource):
    """Subscription state of one email address. Its id is the address."""

    inspectable_fields = ("id", "active", "consent", "topic_names")

    @classmethod
    def find(cls, client: "CrmClient", email: Optional[str]) -> "MailingRecipient":
        if not email:
            raise ResourceNotFound("Items could not be found.", [email])
        return cls(client, {"id": email}).reload()

    def update(self, attributes: Optional[Mapping[str, Any]] = None) -> "MailingRecipient":
        self._load_attributes(
            self._api().put(self.instance_path, dict(attributes or {}), self._if_match_header())
        )
        return self


class MailingDelivery(Inspectable, AttributeProvider):
    """Delivery state of a mailing for one email address.

    Deliveries are nested below their mailing and identified by the
    mailing's id plus the recipient's email address.
    """

    inspectable_fields = ("mailing_id", "id")

    @classmethod
    def all(
        cls,
        client: "CrmClient",
        mailing_id: str,
        since: Union[datetime, str, None] = None,
    ) -> List["MailingDelivery"]:
        """All deliveries of a mailing, optionally only those changed since `since`.

        Raises:
            TypeError: if `since` is neither a datetime, a string nor None
        """
        params: Dict[str, Any] = {}
        if isinstance(since, datetime):
            if since.tzinfo is None:
                since = since.replace(tzinfo=timezone.utc)
            params["since"] = since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        elif isinstance(since, str):
            params["since"] = since
        elif since is not None:
            raise TypeError(f"unknown class of since param: {type(since).__name__}")

        path = cls._path_for(mailing_id)
        return [cls(client, {"mailing_id": mailing_id, **attrs}) for attrs in client.api.get(path, params)]

    @classmethod
    def create(
        cls,
        client: "CrmClient",
        mailing_id: str,
        email: str,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> "MailingDelivery":
        return cls(client, {"mailing_id": mailing_id, "id": email}).update(attributes)

    @classmethod
    def find(cls, client: "CrmClient", mailing_id: Optional[str], email: Optional[str]) -> "MailingDelivery":
        if not mailing_id:
            raise ResourceNotFound("Items could not be found.", [mailing_id])
        if not email:
            raise ResourceNotFound("Items could not be found.", [email])
        return cls(client, {"mailing_id": mailing_id, "id": email}).reload()

    @classmethod
    def _path_for(cls, mailing_id: str, email: Optional[str] = None) -> str:
        parts = ["mailings", mailing_id, "mailing_deliveries", email]
        return "/".join(str(p) for p in parts if p is not None)

    @property
    def id(self) -> Optional[str]:
        return self.attribute("id")

    @property
    def instance_path(self) -> str:
        return self._path_for(self.attribute("mailing_id"), self.id)

    def update(self, attributes: Optional[Mapping[str, Any]] = None) -> "MailingDelivery":
        return self._load_delivery(
            self._api().put(self.instance_path, dict(attributes or {}), {"If-Match": self.attribute("version")})
        )

    def delete(self) -> None:
        self._api().delete(self.instance_path, None, {"If-Match": self.attribute("version")})
        return None

    def reload(self) -> "MailingDelivery":
        return self._load_delivery(self._api().get(self.instance_path))

    def _load_delivery(self, attributes: Mapping[str, Any]) -> "MailingDelivery":
        # The response does not necessarily repeat the parent mailing
        self._load_attributes({"mailing_id": self.attribute("mailing_id"), **attributes})
        return self

    def _api(self) -> "RestApi":
        return self._client.api  # type: ignore[union-attr]


ResourceRegistry.register("Mailing", Mailing)
ResourceRegistry.register("MailingRecipient", MailingRecipient)
