"""Entity -> response schema projection shared by every read and write path"""

from typing import Type, TypeVar

from pydantic import BaseModel

from sales_api.query.listing import Page
from sales_api.schemas.common import PageResponse

S = TypeVar("S", bound=BaseModel)


def project(schema: Type[S], entity) -> S:
    """Read the whitelisted fields of ``entity`` into ``schema``; the entity is not modified"""
    return schema.model_validate(entity, from_attributes=True)


def project_page(schema: Type[S], page: Page) -> PageResponse:
    return PageResponse[schema](
        data=[project(schema, entity) for entity in page.items],
        page=page.page,
        limit=page.limit,
        total=page.total,
        total_pages=page.total_pages,
    )
