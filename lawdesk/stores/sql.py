"""
SQL record stores.

One ORM table per entity; list-valued fields (case assignees, message
recipients, invoice time entries) live in ordered join tables. Records cross
the boundary as camelCase dicts; columns are the snake_case field names.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type
import logging

from pydantic.alias_generators import to_snake
from sqlalchemy import Table, delete, func, insert, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lawdesk.core.errors import DuplicateRecord, InvalidRecord, LawDeskError, RecordNotFound
from lawdesk.db import models
from lawdesk.stores.base import CredentialStore, Record, RecordStore
from lawdesk.stores.entities import EntitySpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinTable:
    table: Table
    owner_column: str
    value_column: str


@dataclass(frozen=True)
class TableMapping:
    model: Type[Any]
    join_tables: Dict[str, JoinTable] = field(default_factory=dict)


def constraint_error(label: str, error: IntegrityError) -> LawDeskError:
    """Unique violations are duplicates; any other constraint failure is an invalid record."""
    detail = str(error.orig).lower()
    if "unique" in detail or "duplicate key" in detail:
        return DuplicateRecord(f"{label} conflicts with an existing record")
    return InvalidRecord(f"{label} violates a database constraint")


TABLES: Dict[str, TableMapping] = {
    "users": TableMapping(models.User),
    "clients": TableMapping(models.Client),
    "cases": TableMapping(
        models.Case,
        {"assignedTo": JoinTable(models.case_assignments, "case_id", "user_id")},
    ),
    "tasks": TableMapping(models.Task),
    "court_logs": TableMapping(models.CourtLog),
    "messages": TableMapping(
        models.Message,
        {"toUserIds": JoinTable(models.message_recipients, "message_id", "user_id")},
    ),
    "time_entries": TableMapping(models.TimeEntry),
    "invoices": TableMapping(
        models.Invoice,
        {"timeEntryIds": JoinTable(models.invoice_time_entries, "invoice_id", "time_entry_id")},
    ),
    "payments": TableMapping(models.Payment),
    "expenses": TableMapping(models.Expense),
    "other_payments": TableMapping(models.OtherPayment),
}


class SqlRecordStore(RecordStore):
    def __init__(self, spec: EntitySpec, session_factory: async_sessionmaker):
        super().__init__(spec)
        self.session_factory = session_factory
        mapping = TABLES[spec.name]
        self.model = mapping.model
        self.join_tables = mapping.join_tables
        self.columns = {
            f: to_snake(f) for f in spec.fields if f not in self.join_tables
        }

    # ---- row <-> record --------------------------------------------------

    def _to_record(self, row: Any, lists: Mapping[str, List[str]]) -> Record:
        record: Record = {}
        for field_name, column in self.columns.items():
            value = getattr(row, column)
            if value is not None:
                record[field_name] = value
        for field_name in self.join_tables:
            record[field_name] = list(lists.get(field_name, []))
        return record

    def _apply(self, row: Any, record: Mapping[str, Any]) -> None:
        for field_name, column in self.columns.items():
            if field_name == "id":
                continue
            setattr(row, column, record.get(field_name))

    async def _load_lists(
        self, session: AsyncSession, ids: Sequence[str]
    ) -> Dict[str, Dict[str, List[str]]]:
        lists: Dict[str, Dict[str, List[str]]] = {record_id: {} for record_id in ids}
        if not ids:
            return lists
        for field_name, join in self.join_tables.items():
            owner = join.table.c[join.owner_column]
            value = join.table.c[join.value_column]
            result = await session.execute(
                select(owner, value)
                .where(owner.in_(ids))
                .order_by(owner, join.table.c.position)
            )
            for owner_id, value_id in result.all():
                lists[owner_id].setdefault(field_name, []).append(value_id)
        return lists

    async def _write_list(
        self, session: AsyncSession, record_id: str, field_name: str, values: Optional[List[str]]
    ) -> None:
        join = self.join_tables[field_name]
        owner = join.table.c[join.owner_column]
        await session.execute(delete(join.table).where(owner == record_id))
        # Duplicates collapse to their first position
        unique = list(dict.fromkeys(values or []))
        if unique:
            await session.execute(
                insert(join.table),
                [
                    {join.owner_column: record_id, join.value_column: v, "position": i}
                    for i, v in enumerate(unique)
                ],
            )

    # ---- filtering -------------------------------------------------------

    def _conditions(self, filters: Mapping[str, Any]) -> List[Any]:
        conditions = []
        for key, value in filters.items():
            if key == "search":
                conditions.append(or_(*[
                    getattr(self.model, self.columns[f]).icontains(str(value), autoescape=True)
                    for f in self.spec.search_fields
                ]))
                continue
            alternatives = []
            for field_name in self.spec.filters[key]:
                if field_name in self.join_tables:
                    join = self.join_tables[field_name]
                    alternatives.append(
                        self.model.id.in_(
                            select(join.table.c[join.owner_column]).where(
                                join.table.c[join.value_column] == value
                            )
                        )
                    )
                else:
                    alternatives.append(getattr(self.model, self.columns[field_name]) == value)
            conditions.append(or_(*alternatives))
        return conditions

    # ---- backend hooks ---------------------------------------------------

    async def _select(
        self, filters: Mapping[str, Any], offset: int, limit: Optional[int]
    ) -> Tuple[List[Record], int]:
        conditions = self._conditions(filters)
        async with self.session_factory() as session:
            try:
                total = (
                    await session.execute(
                        select(func.count()).select_from(self.model).where(*conditions)
                    )
                ).scalar_one()
                if limit == 0:
                    return [], total

                query = (
                    select(self.model)
                    .where(*conditions)
                    .order_by(self.model.created_at.asc(), self.model.id.asc())
                    .offset(offset)
                )
                if limit is not None:
                    query = query.limit(limit)
                rows = (await session.execute(query)).scalars().all()
                lists = await self._load_lists(session, [row.id for row in rows])
                return [self._to_record(row, lists[row.id]) for row in rows], total
            except SQLAlchemyError as e:
                logger.error(f"Database error listing {self.spec.name}: {e}")
                raise

    async def _load(self, record_id: str) -> Optional[Record]:
        async with self.session_factory() as session:
            try:
                row = await session.get(self.model, record_id)
                if row is None:
                    return None
                lists = await self._load_lists(session, [record_id])
                return self._to_record(row, lists[record_id])
            except SQLAlchemyError as e:
                logger.error(f"Database error loading {self.spec.label.lower()} {record_id}: {e}")
                raise

    async def _insert(self, record: Record) -> None:
        async with self.session_factory() as session:
            try:
                row = self.model(id=record["id"])
                self._apply(row, record)
                session.add(row)
                await session.flush()
                for field_name in self.join_tables:
                    await self._write_list(session, record["id"], field_name, record.get(field_name))
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"Integrity error creating {self.spec.label.lower()}: {e}")
                raise constraint_error(self.spec.label, e)
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error creating {self.spec.label.lower()}: {e}")
                raise

    async def _save(self, record: Record, changed: Tuple[str, ...]) -> None:
        async with self.session_factory() as session:
            try:
                row = await session.get(self.model, record["id"])
                if row is None:
                    raise RecordNotFound(self.spec.label, record["id"])
                self._apply(row, record)
                for field_name in self.join_tables:
                    if field_name in changed:
                        await self._write_list(session, record["id"], field_name, record.get(field_name))
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"Integrity error updating {self.spec.label.lower()} {record['id']}: {e}")
                raise constraint_error(self.spec.label, e)
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error updating {self.spec.label.lower()} {record['id']}: {e}")
                raise

    async def _remove(self, record_id: str) -> bool:
        async with self.session_factory() as session:
            try:
                row = await session.get(self.model, record_id)
                if row is None:
                    return False
                for join in self.join_tables.values():
                    await session.execute(
                        delete(join.table).where(join.table.c[join.owner_column] == record_id)
                    )
                await session.delete(row)
                await session.commit()
                return True
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error deleting {self.spec.label.lower()} {record_id}: {e}")
                raise


class SqlCredentialStore(CredentialStore):
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get(self, user_id: str) -> Optional[str]:
        async with self.session_factory() as session:
            row = await session.get(models.UserCredential, user_id)
            return row.password_hash if row else None

    async def set(self, user_id: str, password_hash: str) -> None:
        async with self.session_factory() as session:
            try:
                await session.merge(models.UserCredential(user_id=user_id, password_hash=password_hash))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error storing credentials for {user_id}: {e}")
                raise

    async def delete(self, user_id: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                delete(models.UserCredential).where(models.UserCredential.user_id == user_id)
            )
            await session.commit()
