from typing import Generic, List, TypeVar
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every API schema: snake_case attributes, camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RecordBase(CamelModel):
    id: str
    created_at: str


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Page(CamelModel, Generic[T]):
    items: List[T]
    pagination: Pagination


class DeleteResult(CamelModel):
    success: bool = True


def dump_create(model: BaseModel) -> dict:
    """Fields supplied on create, camelCase, JSON-compatible; unset optionals are left to store defaults."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_update(model: BaseModel) -> dict:
    """Only the fields the caller actually sent."""
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)
