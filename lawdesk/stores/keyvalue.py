"""
Key-value record stores.

Each collection lives under one fixed key (``lawfirm_clients`` ...) as a JSON
array, and password hashes under ``lawfirm_passwords``. ``MemoryBackend``
keeps the key space in process; ``JsonFileBackend`` loads it from a file when
opened and rewrites the file after every write.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple
import asyncio
import copy
import json
import logging

import aiofiles
import aiofiles.os

from lawdesk.stores.base import CredentialStore, Record, RecordStore, record_matches, sort_key
from lawdesk.stores.entities import EntitySpec

logger = logging.getLogger(__name__)

PASSWORDS_KEY = "lawfirm_passwords"


class MemoryBackend:
    """In-process key space."""

    def __init__(self):
        self._data: Dict[str, Any] = {}

    async def open(self) -> None:
        return None

    async def close(self) -> None:
        return None

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        await self.flush()

    async def flush(self) -> None:
        return None


class JsonFileBackend(MemoryBackend):
    """
    Key space persisted to a single JSON file.

    The file is read once by ``open`` and written atomically on every ``set``.
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    async def open(self) -> None:
        if self.path.exists():
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            try:
                self._data = json.loads(content) or {}
            except json.JSONDecodeError as e:
                logger.error(f"Local store {self.path} is not valid JSON: {e}")
                raise
            logger.info(f"Loaded local store from {self.path}")
        else:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._data = {}
            await self.flush()
            logger.info(f"Created local store at {self.path}")

    async def flush(self) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        async with self._write_lock:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(self._data, indent=2))
            await aiofiles.os.replace(tmp_path, self.path)


class KeyValueRecordStore(RecordStore):
    """Collection stored as a JSON array under the entity's storage key, in insertion order."""

    def __init__(self, spec: EntitySpec, backend: MemoryBackend):
        super().__init__(spec)
        self.backend = backend

    def _records(self) -> List[Record]:
        return self.backend.get(self.spec.storage_key, []) or []

    async def _select(
        self, filters: Mapping[str, Any], offset: int, limit: Optional[int]
    ) -> Tuple[List[Record], int]:
        matches = [r for r in self._records() if record_matches(self.spec, r, filters)]
        matches.sort(key=sort_key)
        if limit is None:
            return matches[offset:], len(matches)
        return matches[offset:offset + limit], len(matches)

    async def _load(self, record_id: str) -> Optional[Record]:
        return next((r for r in self._records() if r.get("id") == record_id), None)

    async def _insert(self, record: Record) -> None:
        records = self._records()
        records.append(record)
        await self.backend.set(self.spec.storage_key, records)

    async def _save(self, record: Record, changed: Tuple[str, ...]) -> None:
        records = self._records()
        for index, current in enumerate(records):
            if current.get("id") == record["id"]:
                records[index] = record
                break
        await self.backend.set(self.spec.storage_key, records)

    async def _remove(self, record_id: str) -> bool:
        records = self._records()
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            return False
        await self.backend.set(self.spec.storage_key, remaining)
        return True


class KeyValueCredentialStore(CredentialStore):
    def __init__(self, backend: MemoryBackend):
        self.backend = backend

    async def get(self, user_id: str) -> Optional[str]:
        return (self.backend.get(PASSWORDS_KEY, {}) or {}).get(user_id)

    async def set(self, user_id: str, password_hash: str) -> None:
        passwords = self.backend.get(PASSWORDS_KEY, {}) or {}
        passwords[user_id] = password_hash
        await self.backend.set(PASSWORDS_KEY, passwords)

    async def delete(self, user_id: str) -> None:
        passwords = self.backend.get(PASSWORDS_KEY, {}) or {}
        if passwords.pop(user_id, None) is not None:
            await self.backend.set(PASSWORDS_KEY, passwords)
