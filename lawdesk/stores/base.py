"""
Record store contract.

``RecordStore`` implements everything that is the same for every backend:
field checking, id generation, timestamps, defaults, partial-update merging
and pagination arithmetic. Backends only load, select, save and remove
records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from math import ceil
from typing import Any, Dict, List, Mapping, Optional, Tuple
import copy
import logging
import uuid

from lawdesk.core.errors import InvalidFilter, InvalidRecord, RecordNotFound
from lawdesk.stores.entities import EntitySpec

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

SYSTEM_FIELDS = ("id", "createdAt", "updatedAt")

_last_stamp: Optional[datetime] = None


def utcnow_iso() -> str:
    """Current UTC time, strictly increasing within the process."""
    global _last_stamp
    now = datetime.now(timezone.utc)
    if _last_stamp is not None and now <= _last_stamp:
        now = _last_stamp + timedelta(microseconds=1)
    _last_stamp = now
    return now.isoformat(timespec="microseconds")


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


@dataclass
class Page:
    items: List[Record]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "totalPages": self.total_pages,
            },
        }


def _drop_none(record: Record) -> Record:
    """A None value means the field is unset; records never carry explicit nulls."""
    return {k: v for k, v in record.items() if v is not None}


def sort_key(record: Mapping[str, Any]) -> Tuple[str, str]:
    """Canonical list order for every backend: createdAt, then id."""
    return (record.get("createdAt") or "", record.get("id") or "")


def field_matches(record: Mapping[str, Any], field: str, value: Any, list_fields: Tuple[str, ...]) -> bool:
    current = record.get(field)
    if field in list_fields:
        return value in (current or [])
    return current == value


def search_matches(record: Mapping[str, Any], term: str, fields: Tuple[str, ...]) -> bool:
    needle = term.lower()
    for field in fields:
        current = record.get(field)
        if current is not None and needle in str(current).lower():
            return True
    return False


def record_matches(spec: EntitySpec, record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """Python evaluation of a filter set, used by the key-value backends."""
    for key, value in filters.items():
        if key == "search":
            if not search_matches(record, value, spec.search_fields):
                return False
            continue
        if not any(field_matches(record, f, value, spec.list_fields) for f in spec.filters[key]):
            return False
    return True


class RecordStore(ABC):
    """
    Create/read/update/delete over one entity collection.
    """

    def __init__(self, spec: EntitySpec):
        self.spec = spec
        self._fields = frozenset(spec.fields)
        self._non_nullable = frozenset(spec.non_nullable_fields)

    # ---- contract --------------------------------------------------------

    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page:
        clean = self._clean_filters(filters)
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        items, total = await self._select(clean, (page - 1) * limit, limit)
        return Page(items=items, total=total, page=page, limit=limit)

    async def all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Record]:
        clean = self._clean_filters(filters)
        items, _ = await self._select(clean, 0, None)
        return items

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        clean = self._clean_filters(filters)
        _, total = await self._select(clean, 0, 0)
        return total

    async def get(self, record_id: str) -> Record:
        record = await self._load(record_id)
        if record is None:
            raise RecordNotFound(self.spec.label, record_id)
        return record

    async def exists(self, record_id: str) -> bool:
        return await self._load(record_id) is not None

    async def create(self, fields: Mapping[str, Any]) -> Record:
        data = self._clean_fields(fields)
        now = utcnow_iso()
        record: Record = {"id": new_id(self.spec.id_prefix)}
        record.update(self.spec.defaults())
        record.update(data)
        record["createdAt"] = now
        if self.spec.touch_on_update:
            record["updatedAt"] = now
        record = _drop_none(record)
        await self._insert(record)
        logger.info(f"Created {self.spec.label.lower()} {record['id']}")
        return copy.deepcopy(record)

    def check_clearable(self, fields: Mapping[str, Any]) -> None:
        """Reject None for a field every stored record must carry."""
        cleared = sorted(k for k, v in fields.items() if v is None and k in self._non_nullable)
        if cleared:
            raise InvalidRecord(f"Cannot clear required field(s): {', '.join(cleared)}")

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        data = self._clean_fields(fields)
        self.check_clearable(data)
        current = await self.get(record_id)
        merged = {**current, **data}
        if self.spec.touch_on_update:
            merged["updatedAt"] = utcnow_iso()
        merged = _drop_none(merged)
        await self._save(merged, changed=tuple(data))
        logger.info(f"Updated {self.spec.label.lower()} {record_id}")
        return copy.deepcopy(merged)

    async def delete(self, record_id: str) -> None:
        removed = await self._remove(record_id)
        if not removed:
            logger.warning(f"{self.spec.label} not found for deletion: {record_id}")
            raise RecordNotFound(self.spec.label, record_id)
        logger.info(f"Deleted {self.spec.label.lower()} {record_id}")

    # ---- backend hooks ---------------------------------------------------

    @abstractmethod
    async def _select(
        self, filters: Mapping[str, Any], offset: int, limit: Optional[int]
    ) -> Tuple[List[Record], int]:
        """Return one page of matching records in canonical order plus the total match count.

        ``limit=None`` means no limit; ``limit=0`` asks for the count only.
        """

    @abstractmethod
    async def _load(self, record_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    async def _insert(self, record: Record) -> None:
        ...

    @abstractmethod
    async def _save(self, record: Record, changed: Tuple[str, ...]) -> None:
        ...

    @abstractmethod
    async def _remove(self, record_id: str) -> bool:
        ...

    # ---- helpers ---------------------------------------------------------

    def _clean_fields(self, fields: Mapping[str, Any]) -> Record:
        unknown = [k for k in fields if k not in self._fields]
        if unknown:
            raise InvalidRecord(f"Unknown {self.spec.label.lower()} field(s): {', '.join(sorted(unknown))}")
        clean = {}
        for key, value in fields.items():
            if key in SYSTEM_FIELDS:
                continue
            if value is None and key in self.spec.list_fields:
                value = []
            clean[key] = copy.deepcopy(value)
        return clean

    def _clean_filters(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        if not filters:
            return {}
        allowed = self.spec.filter_keys
        clean = {}
        for key, value in filters.items():
            if value is None or value == "":
                continue
            if key not in allowed:
                raise InvalidFilter(f"Cannot filter {self.spec.name} by '{key}'")
            clean[key] = value
        return clean


class CredentialStore(ABC):
    """Password hashes, kept apart from the public user records."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, user_id: str, password_hash: str) -> None:
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        ...
