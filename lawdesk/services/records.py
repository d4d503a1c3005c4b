from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union
import asyncio
import logging

from pydantic import BaseModel, ValidationError

from lawdesk.core.errors import InvalidRecord, ReferenceConflict
from lawdesk.schemas.base import dump_create, dump_update
from lawdesk.schemas.case import CaseCreate, CaseUpdate
from lawdesk.schemas.client import ClientCreate, ClientUpdate, display_name
from lawdesk.schemas.court_log import CourtLogCreate, CourtLogUpdate
from lawdesk.schemas.task import TaskCreate, TaskUpdate
from lawdesk.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from lawdesk.services import integrity
from lawdesk.stores import Page, StoreSet
from lawdesk.stores.base import Record

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Mapping[str, Any]]
ModelT = TypeVar("ModelT", bound=BaseModel)


def first_validation_message(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return "Invalid record"
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid record")


def validate_payload(schema: Type[ModelT], data: Payload) -> ModelT:
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidRecord(first_validation_message(e)) from e


class RecordService:
    """
    CRUD over one collection.

    Adds schema validation, reference checks and the local backend's
    artificial latency on top of the record store. Subclasses customise the
    ``before_*``/``after_*`` hooks.
    """

    entity: str = ""
    create_schema: Type[BaseModel] = BaseModel
    update_schema: Type[BaseModel] = BaseModel

    def __init__(self, stores: StoreSet, latency: float = 0.0):
        self.stores = stores
        self.store = stores.for_entity(self.entity)
        self.latency = latency

    async def simulate_latency(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)

    def _validate(self, schema: Type[BaseModel], data: Payload, partial: bool) -> Dict[str, Any]:
        data = validate_payload(schema, data)
        return dump_update(data) if partial else dump_create(data)

    def _reject_cleared(self, fields: Mapping[str, Any]) -> None:
        self.store.check_clearable(fields)

    # ---- operations ------------------------------------------------------

    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page:
        await self.simulate_latency()
        return await self.store.list(filters, page, limit)

    async def get(self, record_id: str) -> Record:
        await self.simulate_latency()
        return await self.store.get(record_id)

    async def create(self, data: Payload, actor_id: Optional[str] = None) -> Record:
        await self.simulate_latency()
        fields = self._validate(self.create_schema, data, partial=False)
        fields = await self.before_create(fields, actor_id)
        await integrity.check_references(self.stores, self.entity, fields)
        fields = await self.enrich(fields)
        record = await self.store.create(fields)
        await self.after_create(record)
        return record

    async def update(self, record_id: str, data: Payload) -> Record:
        await self.simulate_latency()
        fields = self._validate(self.update_schema, data, partial=True)
        self._reject_cleared(fields)
        current = await self.store.get(record_id)
        await integrity.check_references(self.stores, self.entity, fields)
        fields = await self.before_update(current, fields)
        fields = await self.enrich(fields)
        record = await self.store.update(record_id, fields)
        await self.after_update(current, record)
        return record

    async def delete(self, record_id: str) -> None:
        await self.simulate_latency()
        current = await self.store.get(record_id)
        await self.before_delete(current)
        await integrity.check_deletable(self.stores, self.entity, record_id)
        await integrity.release_references(self.stores, self.entity, record_id)
        await self.store.delete(record_id)

    # ---- hooks -----------------------------------------------------------

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        return fields

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        return fields

    async def enrich(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Fill denormalized fields from referenced records."""
        return fields

    async def after_create(self, record: Record) -> None:
        return None

    async def after_update(self, previous: Record, record: Record) -> None:
        return None

    async def before_delete(self, record: Record) -> None:
        return None


class ClientService(RecordService):
    entity = "clients"
    create_schema = ClientCreate
    update_schema = ClientUpdate

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        name_parts = ("type", "firstName", "middleName", "lastName", "companyName")
        if "name" not in fields and any(part in fields for part in name_parts):
            merged = {**current, **fields}
            name = display_name(
                merged.get("type"),
                merged.get("firstName"),
                merged.get("middleName"),
                merged.get("lastName"),
                merged.get("companyName"),
            )
            if name:
                fields["name"] = name
        return fields


class CaseService(RecordService):
    entity = "cases"
    create_schema = CaseCreate
    update_schema = CaseUpdate


class TaskService(RecordService):
    entity = "tasks"
    create_schema = TaskCreate
    update_schema = TaskUpdate


class CourtLogService(RecordService):
    entity = "court_logs"
    create_schema = CourtLogCreate
    update_schema = CourtLogUpdate

    async def enrich(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if fields.get("clientId"):
            client = await self.stores.clients.get(fields["clientId"])
            fields["clientName"] = client.get("name", "")
        if "caseId" in fields:
            if fields["caseId"]:
                case = await self.stores.cases.get(fields["caseId"])
                fields["caseNumber"] = case.get("caseNumber")
            else:
                fields["caseNumber"] = None
        return fields


# Frozen while the entry is on an invoice
INVOICED_LOCKED_FIELDS = ("clientId", "duration", "hourlyRate", "billable")


class TimeEntryService(RecordService):
    entity = "time_entries"
    create_schema = TimeEntryCreate
    update_schema = TimeEntryUpdate

    async def before_create(self, fields: Dict[str, Any], actor_id: Optional[str]) -> Dict[str, Any]:
        if not fields.get("userId"):
            if not actor_id:
                raise InvalidRecord("userId is required")
            fields["userId"] = actor_id
        return fields

    async def before_update(self, current: Record, fields: Dict[str, Any]) -> Dict[str, Any]:
        invoice_id = current.get("invoiceId")
        if invoice_id:
            locked = [f for f in INVOICED_LOCKED_FIELDS if f in fields and fields[f] != current.get(f)]
            if locked:
                raise ReferenceConflict(
                    f"Time entry is on invoice {invoice_id}; cannot change {', '.join(locked)}"
                )
        return fields
