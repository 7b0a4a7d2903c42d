"""Tests for AttributeProvider: decoding and reference resolution."""

from datetime import datetime, timezone

import pytest

from webcrm.config import ConfigurationError
from webcrm.core.attributes import AttributeProvider, parse_timestamp
from webcrm.core.inflection import pluralize, singularize, underscore
from webcrm.core.item_enumerator import ItemEnumerator
from webcrm.resources import Account, Contact


class TestAccess:
    """Tests for the ways of reading attributes."""

    def test_access_styles(self):
        """Attributes are readable by index, method, property and mapping."""
        item = AttributeProvider(None, {"first_name": "John"})

        assert item["first_name"] == "John"
        assert item.attribute("first_name") == "John"
        assert item.first_name == "John"
        assert item.attributes["first_name"] == "John"

    def test_missing_attribute(self):
        """Missing attributes are None by name and AttributeError by property."""
        item = AttributeProvider(None, {})

        assert item.attribute("nope") is None
        assert item["nope"] is None
        assert item.has_attribute("nope") is False
        with pytest.raises(AttributeError):
            item.nope

    def test_attributes_are_read_only(self):
        """The attribute mapping cannot be modified."""
        item = AttributeProvider(None, {"a": 1})

        with pytest.raises(TypeError):
            item.attributes["a"] = 2

    def test_private_names_do_not_resolve(self):
        """Underscore names never fall through to attributes."""
        item = AttributeProvider(None, {"_secret": 1})
        assert not hasattr(item, "_secret")

    def test_dir_lists_attributes_and_references(self):
        """dir() includes attribute and reference names."""
        item = AttributeProvider(None, {"name": "x", "account_id": "a", "contact_ids": []})
        names = dir(item)

        assert "name" in names
        assert "account" in names
        assert "contacts" in names


class TestTimestamps:
    """Tests for decoding `_at` attributes."""

    def test_decoded_to_utc(self):
        """Offsets are normalized to UTC."""
        item = AttributeProvider(None, {"updated_at": "2012-09-19T12:00:00+02:00"})

        assert item.updated_at == datetime(2012, 9, 19, 10, 0, tzinfo=timezone.utc)
        assert item.raw("updated_at") == "2012-09-19T12:00:00+02:00"

    def test_zulu_suffix(self):
        """A trailing Z is understood."""
        assert parse_timestamp("2014-01-01T08:30:00Z") == datetime(2014, 1, 1, 8, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        """Timestamps without offset are taken as UTC."""
        assert parse_timestamp("2014-01-01T08:30:00") == datetime(2014, 1, 1, 8, 30, tzinfo=timezone.utc)

    def test_unparsable_timestamp(self):
        """Unparsable values decode to None and keep the raw value."""
        item = AttributeProvider(None, {"created_at": "yesterday"})

        assert item.created_at is None
        assert item.raw("created_at") == "yesterday"

    def test_null_timestamp(self):
        """null stays None."""
        item = AttributeProvider(None, {"deleted_at": None})
        assert item.deleted_at is None

    def test_other_keys_untouched(self):
        """Only `_at` keys are decoded; raw falls back to the value."""
        item = AttributeProvider(None, {"birthday": "1980-01-01"})

        assert item.birthday == "1980-01-01"
        assert item.raw("birthday") == "1980-01-01"


class TestReferences:
    """Tests for lazy reference resolution."""

    def test_id_reference(self, client, mget, dummy_api):
        """`account` resolves `account_id` through find."""
        mget["acc1"] = {"id": "acc1", "base_type": "Account", "name": "Acme"}
        contact = Contact(client, {"id": "c1", "account_id": "acc1"})

        account = contact.account

        assert isinstance(account, Account)
        assert account.name == "Acme"
        assert dummy_api.calls("GET", "mget")[0]["payload"] == {"ids": ["acc1"]}

    def test_reference_fetched_on_every_access(self, client, mget, dummy_api):
        """References are not cached."""
        mget["acc1"] = {"id": "acc1", "base_type": "Account"}
        contact = Contact(client, {"id": "c1", "account_id": "acc1"})

        contact.account
        contact.account

        assert dummy_api.call_count("GET", "mget") == 2

    def test_ids_reference(self, client, mget, dummy_api):
        """`contacts` resolves `contact_ids` into an ItemEnumerator."""
        mget["c1"] = {"id": "c1", "base_type": "Contact"}
        mget["c2"] = {"id": "c2", "base_type": "Contact"}
        item = AttributeProvider(client, {"contact_ids": ["c1", "c2"]})

        contacts = item.contacts

        assert isinstance(contacts, ItemEnumerator)
        assert dummy_api.call_count() == 0
        assert [c.id for c in contacts] == ["c1", "c2"]

    def test_compound_plural_reference(self, client, mget):
        """`event_contacts` resolves `event_contact_ids`."""
        mget["ec1"] = {"id": "ec1", "base_type": "EventContact"}
        item = AttributeProvider(client, {"event_contact_ids": ["ec1"]})

        assert [ec.id for ec in item.event_contacts] == ["ec1"]

    def test_literal_attribute_wins(self, client, dummy_api):
        """A literal attribute shadows the reference."""
        item = AttributeProvider(client, {"account": "literal", "account_id": "acc1"})

        assert item.account == "literal"
        assert dummy_api.call_count() == 0

    def test_unbound_reference(self):
        """Resolving without a client raises ConfigurationError."""
        item = AttributeProvider(None, {"account_id": "acc1"})

        with pytest.raises(ConfigurationError):
            item.account

    def test_no_reference(self, client):
        """reference() of an unknown name raises AttributeError."""
        with pytest.raises(AttributeError):
            AttributeProvider(client, {}).reference("account")


class TestInflection:
    """Tests for name inflection."""

    @pytest.mark.parametrize(
        "word,plural",
        [("contact", "contacts"), ("activity", "activities"), ("event_contact", "event_contacts"), ("day", "days")],
    )
    def test_pluralize_roundtrip(self, word, plural):
        """pluralize and singularize are inverse for resource names."""
        assert pluralize(word) == plural
        assert singularize(plural) == word

    def test_underscore(self):
        """CamelCase becomes snake_case."""
        assert underscore("EventContact") == "event_contact"
        assert underscore("TemplateSet") == "template_set"
        assert underscore("Contact") == "contact"
