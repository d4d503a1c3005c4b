"""
Cloud document stores on Supabase.

Every collection is a table of JSON documents: ``(id text primary key,
data jsonb, created_at text)``. Filters run server-side through PostgREST
operators on ``data``. A ``settings`` table holds the ``init`` marker written
the first time the store is opened.
"""

from typing import Any, List, Mapping, Optional, Tuple
import json
import logging

from lawdesk.stores.base import CredentialStore, Record, RecordStore, utcnow_iso
from lawdesk.stores.entities import EntitySpec

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "settings"
PASSWORDS_TABLE = "passwords"
INIT_MARKER = "init"


def _text(value: Any) -> str:
    """Value as PostgREST compares it against ``data->>field``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote(value: str) -> str:
    """Quote a value for use inside an ``or=(...)`` expression."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class SupabaseRecordStore(RecordStore):
    def __init__(self, spec: EntitySpec, client: Any):
        super().__init__(spec)
        self.client = client
        self.table_name = spec.name

    def _table(self):
        return self.client.table(self.table_name)

    def _apply_filter(self, query, key: str, value: Any):
        if key == "search":
            pattern = _quote(f"*{value}*")
            return query.or_(",".join(f"data->>{f}.ilike.{pattern}" for f in self.spec.search_fields))

        fields = self.spec.filters[key]
        if len(fields) == 1:
            field_name = fields[0]
            if field_name in self.spec.list_fields:
                return query.filter(f"data->{field_name}", "cs", json.dumps([value]))
            return query.eq(f"data->>{field_name}", _text(value))

        alternatives = []
        for field_name in fields:
            if field_name in self.spec.list_fields:
                alternatives.append(f"data->{field_name}.cs.{_quote(json.dumps([value]))}")
            else:
                alternatives.append(f"data->>{field_name}.eq.{_quote(_text(value))}")
        return query.or_(",".join(alternatives))

    async def _select(
        self, filters: Mapping[str, Any], offset: int, limit: Optional[int]
    ) -> Tuple[List[Record], int]:
        query = self._table().select("data", count="exact")
        for key, value in filters.items():
            query = self._apply_filter(query, key, value)
        query = query.order("created_at").order("id")
        if limit == 0:
            query = query.limit(1)
        elif limit is not None:
            query = query.range(offset, offset + limit - 1)
        response = query.execute()
        total = response.count if response.count is not None else len(response.data)
        if limit == 0:
            return [], total
        items = [row["data"] for row in response.data]
        if limit is None and offset:
            items = items[offset:]
        return items, total

    async def _load(self, record_id: str) -> Optional[Record]:
        response = self._table().select("data").eq("id", record_id).limit(1).execute()
        if not response.data:
            return None
        return response.data[0]["data"]

    async def _insert(self, record: Record) -> None:
        self._table().insert(
            {"id": record["id"], "data": record, "created_at": record["createdAt"]}
        ).execute()

    async def _save(self, record: Record, changed: Tuple[str, ...]) -> None:
        self._table().update({"data": record}).eq("id", record["id"]).execute()

    async def _remove(self, record_id: str) -> bool:
        response = self._table().delete().eq("id", record_id).execute()
        return bool(response.data)


class SupabaseCredentialStore(CredentialStore):
    def __init__(self, client: Any):
        self.client = client

    async def get(self, user_id: str) -> Optional[str]:
        response = self.client.table(PASSWORDS_TABLE).select("data").eq("id", user_id).limit(1).execute()
        if not response.data:
            return None
        return response.data[0]["data"].get("hash")

    async def set(self, user_id: str, password_hash: str) -> None:
        self.client.table(PASSWORDS_TABLE).upsert(
            {"id": user_id, "data": {"hash": password_hash}, "created_at": utcnow_iso()}
        ).execute()

    async def delete(self, user_id: str) -> None:
        self.client.table(PASSWORDS_TABLE).delete().eq("id", user_id).execute()


def ensure_init_marker(client: Any) -> bool:
    """
    Write the ``settings/init`` document if it is missing.

    Returns True when this call created it.
    """
    response = client.table(SETTINGS_TABLE).select("id").eq("id", INIT_MARKER).limit(1).execute()
    if response.data:
        return False
    now = utcnow_iso()
    client.table(SETTINGS_TABLE).insert(
        {"id": INIT_MARKER, "data": {"initializedAt": now}, "created_at": now}
    ).execute()
    logger.info("Cloud store initialized")
    return True
