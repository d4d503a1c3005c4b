"""
Cross-entity reference rules.

Every foreign key is listed once as ``(field, target collection, filter key)``
where the filter key is how the owning collection is queried for records that
point at a given target id. Create/update reject references to records that
do not exist; delete is rejected while anything still points at the record,
except where a release rule clears the reference instead.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Tuple

from lawdesk.core.errors import InvalidReference, ReferenceConflict
from lawdesk.stores import StoreSet


class Reference(NamedTuple):
    field: str
    target: str
    filter_key: str


REFERENCES: Dict[str, Tuple[Reference, ...]] = {
    "cases": (
        Reference("clientId", "clients", "clientId"),
        Reference("assignedTo", "users", "assignedTo"),
    ),
    "tasks": (
        Reference("assignedTo", "users", "assignedTo"),
        Reference("caseId", "cases", "caseId"),
    ),
    "court_logs": (
        Reference("clientId", "clients", "clientId"),
        Reference("caseId", "cases", "caseId"),
    ),
    "messages": (
        Reference("fromUserId", "users", "fromUserId"),
        Reference("toUserIds", "users", "recipientId"),
        Reference("caseId", "cases", "caseId"),
        Reference("clientId", "clients", "clientId"),
    ),
    "time_entries": (
        Reference("caseId", "cases", "caseId"),
        Reference("clientId", "clients", "clientId"),
        Reference("userId", "users", "userId"),
        Reference("invoiceId", "invoices", "invoiceId"),
    ),
    "invoices": (
        Reference("clientId", "clients", "clientId"),
        Reference("timeEntryIds", "time_entries", "timeEntryId"),
    ),
    "payments": (
        Reference("clientId", "clients", "clientId"),
        Reference("caseId", "cases", "caseId"),
    ),
}

# Deleting the target clears these references instead of being rejected
RELEASE_ON_DELETE: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "invoices": (("time_entries", "invoiceId"),),
}


def _incoming(target: str) -> List[Tuple[str, Reference]]:
    return [
        (owner, ref)
        for owner, refs in REFERENCES.items()
        for ref in refs
        if ref.target == target
    ]


async def check_references(stores: StoreSet, entity: str, data: Mapping[str, Any]) -> None:
    for ref in REFERENCES.get(entity, ()):
        value = data.get(ref.field)
        if value is None or value == "":
            continue
        target_store = stores.for_entity(ref.target)
        for target_id in value if isinstance(value, list) else [value]:
            if not await target_store.exists(target_id):
                raise InvalidReference(f"{target_store.spec.label} {target_id} does not exist")


async def check_deletable(stores: StoreSet, entity: str, record_id: str) -> None:
    released = {owner for owner, _ in RELEASE_ON_DELETE.get(entity, ())}
    label = stores.for_entity(entity).spec.label
    for owner, ref in _incoming(entity):
        if owner in released:
            continue
        owner_store = stores.for_entity(owner)
        count = await owner_store.count({ref.filter_key: record_id})
        if count:
            raise ReferenceConflict(
                f"{label} is still referenced by {count} {owner_store.spec.name.replace('_', ' ')}"
            )


async def release_references(stores: StoreSet, entity: str, record_id: str) -> None:
    for owner, field in RELEASE_ON_DELETE.get(entity, ()):
        owner_store = stores.for_entity(owner)
        for record in await owner_store.all({field: record_id}):
            await owner_store.update(record["id"], {field: None})
