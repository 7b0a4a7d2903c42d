"""Contacts (people) and their password handling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from webcrm.core.mixins import ChangeLoggable, Findable, Inspectable, MergeAndDeletable, Modifiable, Searchable
from webcrm.core.registry import ResourceRegistry
from webcrm.core.resource import BasicResource
from webcrm.errors import AuthenticationFailed

if TYPE_CHECKING:
    from webcrm.client import CrmClient


class Contact(Findable, Modifiable, ChangeLoggable, MergeAndDeletable, Searchable, Inspectable, BasicResource):
    """A person. `contact.account` resolves the contact's account."""

    inspectable_fields = ("id", "last_name", "first_name", "email")

    @classmethod
    def authenticate_or_raise(cls, client: "CrmClient", login: str, password: str) -> "Contact":
        """Return the contact with these credentials.

        Raises:
            AuthenticationFailed: if the credentials are invalid
        """
        return cls(
            client,
            client.api.put(f"{cls.resource_path()}/authenticate", {"login": login, "password": password}),
        )

    @classmethod
    def authenticate(cls, client: "CrmClient", login: str, password: str) -> Optional["Contact"]:
        """Like authenticate_or_raise, but returns None for invalid credentials."""
        try:
            return cls.authenticate_or_raise(client, login, password)
        except AuthenticationFailed:
            return None

    @classmethod
    def set_password_by_token(cls, client: "CrmClient", new_password: str, token: str) -> "Contact":
        """Set a new password using a token from generate_password_token."""
        return cls(
            client,
            client.api.put(
                f"{cls.resource_path()}/set_password_by_token",
                {"password": new_password, "token": token},
            ),
        )

    def set_password(self, new_password: str) -> "Contact":
        self._load_attributes(self._api().put(f"{self.instance_path}/set_password", {"password": new_password}))
        return self

    def generate_password_token(self) -> str:
        """Token for set_password_by_token, e.g. for a password reset link."""
        return self._api().post(f"{self.instance_path}/generate_password_token", {})["token"]

    def clear_password(self) -> "Contact":
        self._load_attributes(self._api().put(f"{self.instance_path}/clear_password", {}))
        return self

    def send_password_token_email(self) -> Any:
        """Have the server email a password token to the contact."""
        return self._api().post(f"{self.instance_path}/send_password_token_email", {})


ResourceRegistry.register("Contact", Contact)
