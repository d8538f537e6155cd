"""Shared schema building blocks"""

from typing import Annotated, Generic, List, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from sales_api.query.enums import enum_label

T = TypeVar("T")

# Enum columns are exposed as their lowercase member name
StatusLabel = Annotated[str, BeforeValidator(enum_label)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(CamelModel, Generic[T]):
    """Paginated list envelope"""
    data: List[T]
    page: int
    limit: int
    total: int
    total_pages: int
