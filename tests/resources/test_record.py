"""
Test record resources and optimistic concurrency.
"""

import pytest

from kinto_client import RecordPermissions
from kinto_client.runtime.errors import NotModified, PreconditionFailed, UndefinedIdentity


class TestRecordCrud:
    """Tests for the CRUD protocol on records."""

    def test_paths(self, record):
        assert record.resource_path() == "/buckets/food/collections/meat/records"
        assert record.record_path() == "/buckets/food/collections/meat/records/entrecote"

    def test_create_then_load(self, record):
        record.data = {"price": 12}
        record.create()

        loaded = record.collection.record("entrecote").load()
        assert loaded.data == record.data
        assert loaded.timestamp == record.timestamp
        assert loaded == record

    def test_set_advances_timestamp(self, record):
        record.data = {"price": 12}
        record.set()
        first = record.timestamp

        record.data = {"price": 14}
        record.set()

        loaded = record.collection.record("entrecote").load()
        assert loaded.data["price"] == 14
        assert loaded.timestamp > first

    def test_create_existing_keeps_original(self, record, fake_server):
        record.data = {"price": 12}
        record.create()

        with pytest.raises(PreconditionFailed):
            record.collection.record("entrecote", {"price": 99}).create()
        stored = fake_server.objects["/buckets/food/collections/meat/records/entrecote"]["data"]
        assert stored["price"] == 12

    def test_update_missing(self, record):
        with pytest.raises(PreconditionFailed):
            record.update()

    def test_update_after_concurrent_write(self, record):
        record.set()
        other = record.collection.record("entrecote", {"price": 1}).set()

        record.data = {"price": 2}
        with pytest.raises(PreconditionFailed):
            record.update()

        other.data = {"price": 3}
        other.update()
        assert other.data["price"] == 3

    def test_set_is_unconditioned(self, record, fake_server):
        record.set()
        record.timestamp = 1
        record.data = {"price": 5}
        record.set()

        assert record.data["price"] == 5
        assert "If-Match" not in fake_server.calls[-1]["headers"]

    def test_set_without_id(self, collection, fake_server):
        collection.set()
        record = collection.record(data={"price": 7}).set()

        assert record.id == "generated-0001"
        assert fake_server.calls[-1]["headers"]["If-None-Match"] == "*"

    def test_delete(self, record, fake_server):
        record.set()
        record.delete()

        assert record.data["deleted"] is True
        assert record.id == "entrecote"
        assert record.record_path() not in fake_server.objects

    def test_conditional_load_not_modified(self, record, client):
        record.set()
        request = record.load_request().if_none_match(record.timestamp)

        with pytest.raises(NotModified):
            client.send(request)

    def test_data_id_used_when_no_explicit_id(self, collection):
        collection.set()
        record = collection.record(data={"id": "tartare"}).set()
        assert record.record_path().endswith("/records/tartare")

    def test_missing_id(self, collection):
        with pytest.raises(UndefinedIdentity):
            collection.record().delete()

    def test_permissions(self, record, fake_server):
        record.permissions = RecordPermissions(write=["account:alice"])
        record.set()

        assert fake_server.calls[-1]["body"]["permissions"] == {"write": ["account:alice"]}
        assert record.permissions.write == ["account:alice"]


class TestRecordBody:
    """Tests for the wire body of records."""

    def test_body_forces_id(self, record):
        record.data = {"id": "other", "price": 1}
        body = record.get_body()
        assert body["data"]["id"] == "entrecote"

    def test_body_does_not_mutate_data(self, record):
        record.data = {"price": 1}
        record.get_body()
        assert record.data == {"price": 1}
