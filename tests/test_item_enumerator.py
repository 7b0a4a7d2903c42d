"""Tests for ItemEnumerator: batching, ordering and laziness."""

import pytest

from webcrm.core.item_enumerator import BATCH_LIMIT, ItemEnumerator
from webcrm.errors import ResourceNotFound
from webcrm.resources import Account, Contact


def _serve_all(dummy_api, reverse=False):
    """Answer mget with a Contact for every requested ID."""

    def handler(payload, headers):
        items = [{"id": item_id, "base_type": "Contact"} for item_id in payload["ids"]]
        return list(reversed(items)) if reverse else items

    dummy_api.set_response("GET", "mget", handler=handler)


class TestBatching:
    """Tests for splitting IDs into batches."""

    def test_batch_limit(self):
        """The server accepts 100 IDs per multi-get."""
        assert BATCH_LIMIT == 100

    def test_101_ids_take_two_requests(self, client, dummy_api):
        """101 IDs are fetched in batches of 100 and 1."""
        _serve_all(dummy_api)
        ids = [f"id{n}" for n in range(101)]

        items = list(ItemEnumerator(client, ids))

        batches = [call["payload"]["ids"] for call in dummy_api.calls("GET", "mget")]
        assert [len(batch) for batch in batches] == [100, 1]
        assert batches[0] + batches[1] == ids
        assert [item.id for item in items] == ids

    def test_empty(self, client, dummy_api):
        """No IDs means no requests."""
        enumerator = ItemEnumerator(client, [])

        assert list(enumerator) == []
        assert enumerator.first() is None
        assert dummy_api.call_count() == 0


class TestOrdering:
    """Tests for result order."""

    def test_requested_order_is_kept(self, client, dummy_api):
        """Items come back in requested order whatever the server sends."""
        _serve_all(dummy_api, reverse=True)

        assert [item.id for item in ItemEnumerator(client, ["a", "b", "c"])] == ["a", "b", "c"]

    def test_duplicates(self, client, dummy_api):
        """Duplicate IDs yield one item each."""
        _serve_all(dummy_api)

        assert [item.id for item in ItemEnumerator(client, ["a", "b", "a"])] == ["a", "b", "a"]

    def test_mixed_base_types(self, client, mget):
        """Each item gets the class of its base type."""
        mget["c1"] = {"id": "c1", "base_type": "Contact"}
        mget["a1"] = {"id": "a1", "base_type": "Account"}

        items = list(ItemEnumerator(client, ["c1", "a1"]))

        assert isinstance(items[0], Contact)
        assert isinstance(items[1], Account)

    def test_missing_ids(self, client, mget):
        """IDs absent from the response raise ResourceNotFound."""
        mget["a"] = {"id": "a", "base_type": "Contact"}

        with pytest.raises(ResourceNotFound) as exc_info:
            list(ItemEnumerator(client, ["a", "b"]))
        assert exc_info.value.missing_ids == ["b"]


class TestLaziness:
    """Tests for on-demand fetching."""

    def test_construction_fetches_nothing(self, client, dummy_api):
        """length and total are known without requests."""
        enumerator = ItemEnumerator(client, ["a", "b", "c"])

        assert enumerator.length == 3
        assert len(enumerator) == 3
        assert enumerator.total == 3
        assert dummy_api.call_count() == 0

    def test_total_override(self, client):
        """Search results report the server's hit count as total."""
        enumerator = ItemEnumerator(client, ["a"], total=17)
        assert enumerator.total == 17
        assert enumerator.length == 1

    def test_first_fetches_one_batch(self, client, dummy_api):
        """first() stops after the first batch."""
        _serve_all(dummy_api)
        enumerator = ItemEnumerator(client, [f"id{n}" for n in range(250)])

        assert enumerator.first().id == "id0"
        assert dummy_api.call_count("GET", "mget") == 1

    def test_early_break(self, client, dummy_api):
        """Stopping iteration skips later batches."""
        _serve_all(dummy_api)
        enumerator = ItemEnumerator(client, [f"id{n}" for n in range(250)])

        for index, _item in enumerate(enumerator):
            if index == 150:
                break

        assert dummy_api.call_count("GET", "mget") == 2

    def test_each_pass_fetches_afresh(self, client, dummy_api):
        """Iterating twice issues the requests twice."""
        _serve_all(dummy_api)
        enumerator = ItemEnumerator(client, ["a", "b"])

        enumerator.to_list()
        enumerator.to_list()

        assert dummy_api.call_count("GET", "mget") == 2

    def test_ids_is_a_copy(self, client):
        """Callers cannot change the enumerator through `ids`."""
        enumerator = ItemEnumerator(client, ["a"])
        enumerator.ids.append("b")
        assert enumerator.ids == ["a"]

    def test_repr(self, client):
        """repr shows length and total."""
        assert repr(ItemEnumerator(client, ["a", "b"], total=5)) == "<ItemEnumerator length=2, total=5>"
