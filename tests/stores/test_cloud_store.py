from types import SimpleNamespace
from unittest.mock import MagicMock, call

import pytest

from lawdesk.core.errors import RecordNotFound
from lawdesk.stores import build_cloud_stores
from lawdesk.stores.cloud import (
    SupabaseCredentialStore,
    SupabaseRecordStore,
    ensure_init_marker,
)
from lawdesk.stores.entities import CASES, CLIENTS, MESSAGES
from lawdesk.core.config import Settings

pytestmark = pytest.mark.asyncio

CHAINED = ("select", "eq", "or_", "filter", "order", "range", "limit", "insert", "update", "upsert", "delete")


def make_client(data=None, count=None):
    """A supabase client whose query builder records every chained call."""
    query = MagicMock(name="query")
    for method in CHAINED:
        getattr(query, method).return_value = query
    query.execute.return_value = SimpleNamespace(data=data or [], count=count)
    client = MagicMock(name="supabase")
    client.table.return_value = query
    return client, query


class TestSupabaseRecordStore:
    async def test_create_inserts_document(self):
        client, query = make_client()
        store = SupabaseRecordStore(CLIENTS, client)

        record = await store.create({"name": "Jane", "email": "j@x.com", "phone": "1"})

        client.table.assert_called_with("clients")
        row = query.insert.call_args.args[0]
        assert row["id"] == record["id"]
        assert row["data"] == record
        assert row["created_at"] == record["createdAt"]

    async def test_get_missing_raises(self):
        client, _ = make_client(data=[])
        store = SupabaseRecordStore(CLIENTS, client)
        with pytest.raises(RecordNotFound):
            await store.get("client-missing")

    async def test_list_orders_and_pages_server_side(self):
        rows = [{"data": {"id": "case-1"}}, {"data": {"id": "case-2"}}]
        client, query = make_client(data=rows, count=12)
        store = SupabaseRecordStore(CASES, client)

        page = await store.list({"status": "Open", "assignedTo": "user-a"}, page=2, limit=5)

        assert page.items == [{"id": "case-1"}, {"id": "case-2"}]
        assert page.total == 12
        assert page.total_pages == 3
        query.select.assert_called_with("data", count="exact")
        query.eq.assert_any_call("data->>status", "Open")
        query.filter.assert_any_call("data->assignedTo", "cs", '["user-a"]')
        assert query.order.call_args_list == [call("created_at"), call("id")]
        query.range.assert_called_with(5, 9)

    async def test_search_and_participant_filters_use_or(self):
        client, query = make_client(count=0)
        await SupabaseRecordStore(CLIENTS, client).count({"search": "doe"})
        expression = query.or_.call_args.args[0]
        assert 'data->>name.ilike."*doe*"' in expression
        assert 'data->>email.ilike."*doe*"' in expression

        client, query = make_client(count=0)
        await SupabaseRecordStore(MESSAGES, client).count({"userId": "user-a"})
        expression = query.or_.call_args.args[0]
        assert 'data->>fromUserId.eq."user-a"' in expression
        assert "data->toUserIds.cs." in expression

    async def test_boolean_filter_is_lowercase(self):
        client, query = make_client(count=0)
        await SupabaseRecordStore(MESSAGES, client).count({"read": False})
        query.eq.assert_called_with("data->>read", "false")

    async def test_delete_missing_raises(self):
        client, _ = make_client(data=[])
        store = SupabaseRecordStore(CLIENTS, client)
        with pytest.raises(RecordNotFound):
            await store.delete("client-missing")


class TestSupabaseCredentialStore:
    async def test_hash_lives_in_passwords_table(self):
        client, query = make_client(data=[{"data": {"hash": "h"}}])
        credentials = SupabaseCredentialStore(client)

        assert await credentials.get("user-1") == "h"
        await credentials.set("user-1", "h2")

        client.table.assert_called_with("passwords")
        row = query.upsert.call_args.args[0]
        assert row["id"] == "user-1"
        assert row["data"] == {"hash": "h2"}


class TestInitMarker:
    async def test_written_once(self):
        client, query = make_client(data=[])
        assert ensure_init_marker(client) is True
        assert query.insert.call_args.args[0]["id"] == "init"

        client, query = make_client(data=[{"id": "init"}])
        assert ensure_init_marker(client) is False
        query.insert.assert_not_called()

    async def test_opening_cloud_stores_marks_init(self):
        client, query = make_client(data=[])
        store_set = build_cloud_stores(Settings(), client=client)
        await store_set.open()
        client.table.assert_any_call("settings")
        query.insert.assert_called_once()
        await store_set.close()
