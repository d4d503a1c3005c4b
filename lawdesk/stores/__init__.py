"""
Record store backends and the factory that picks one at startup.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional
import logging

from lawdesk.core.config import Settings
from lawdesk.stores.base import CredentialStore, Page, RecordStore
from lawdesk.stores import entities

logger = logging.getLogger(__name__)

Hook = Callable[[], Awaitable[None]]


@dataclass
class StoreSet:
    """One record store per entity plus the credential store, sharing a lifecycle."""

    backend: str
    users: RecordStore
    clients: RecordStore
    cases: RecordStore
    tasks: RecordStore
    court_logs: RecordStore
    messages: RecordStore
    time_entries: RecordStore
    invoices: RecordStore
    payments: RecordStore
    expenses: RecordStore
    other_payments: RecordStore
    credentials: CredentialStore
    on_open: List[Hook] = field(default_factory=list)
    on_close: List[Hook] = field(default_factory=list)

    async def open(self) -> None:
        for hook in self.on_open:
            await hook()
        logger.info(f"Opened {self.backend} record store")

    async def close(self) -> None:
        for hook in self.on_close:
            await hook()
        logger.info(f"Closed {self.backend} record store")

    def for_entity(self, name: str) -> RecordStore:
        return getattr(self, name)


def _store_set(backend: str, make: Callable[[entities.EntitySpec], RecordStore], credentials: CredentialStore) -> StoreSet:
    stores: Dict[str, Any] = {spec.name: make(spec) for spec in entities.ALL_ENTITIES}
    return StoreSet(backend=backend, credentials=credentials, **stores)


def build_memory_stores() -> StoreSet:
    from lawdesk.stores.keyvalue import KeyValueCredentialStore, KeyValueRecordStore, MemoryBackend

    backend = MemoryBackend()
    store_set = _store_set(
        "memory",
        lambda spec: KeyValueRecordStore(spec, backend),
        KeyValueCredentialStore(backend),
    )
    store_set.on_open.append(backend.open)
    store_set.on_close.append(backend.close)
    return store_set


def build_local_stores(path: str) -> StoreSet:
    from lawdesk.stores.keyvalue import JsonFileBackend, KeyValueCredentialStore, KeyValueRecordStore

    backend = JsonFileBackend(path)
    store_set = _store_set(
        "local",
        lambda spec: KeyValueRecordStore(spec, backend),
        KeyValueCredentialStore(backend),
    )
    store_set.on_open.append(backend.open)
    store_set.on_close.append(backend.close)
    return store_set


def build_sql_stores(settings: Settings, database_url: Optional[str] = None) -> StoreSet:
    from lawdesk.core.database import (
        close_db_connection,
        create_engine_from_settings,
        create_session_factory,
        initialize_db,
    )
    from lawdesk.stores.sql import SqlCredentialStore, SqlRecordStore

    engine = create_engine_from_settings(settings, database_url)
    session_factory = create_session_factory(engine)
    store_set = _store_set(
        "sql",
        lambda spec: SqlRecordStore(spec, session_factory),
        SqlCredentialStore(session_factory),
    )

    async def open_db() -> None:
        await initialize_db(engine)

    async def close_db() -> None:
        await close_db_connection(engine)

    store_set.on_open.append(open_db)
    store_set.on_close.append(close_db)
    return store_set


def build_cloud_stores(settings: Settings, client: Any = None) -> StoreSet:
    from lawdesk.stores.cloud import SupabaseCredentialStore, SupabaseRecordStore, ensure_init_marker

    if client is None:
        from lawdesk.core.supabase import get_supabase_client

        client = get_supabase_client(settings)
    store_set = _store_set(
        "cloud",
        lambda spec: SupabaseRecordStore(spec, client),
        SupabaseCredentialStore(client),
    )

    async def mark_initialized() -> None:
        ensure_init_marker(client)

    store_set.on_open.append(mark_initialized)
    return store_set


def build_stores(settings: Settings) -> StoreSet:
    """
    Build the record stores selected by ``STORAGE_BACKEND``.
    """
    backend = settings.STORAGE_BACKEND
    if backend == "memory":
        return build_memory_stores()
    if backend == "local":
        return build_local_stores(settings.LOCAL_STORE_PATH)
    if backend == "cloud":
        return build_cloud_stores(settings)
    if backend == "sql":
        return build_sql_stores(settings)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "CredentialStore",
    "Page",
    "RecordStore",
    "StoreSet",
    "build_cloud_stores",
    "build_local_stores",
    "build_memory_stores",
    "build_sql_stores",
    "build_stores",
]
