"""Generic CRUD service built on the list-query pipeline"""

from typing import Any, Generic, Mapping, Optional, TypeVar

import structlog
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import Base
from sales_api.models.user import User
from sales_api.query.listing import ListSpec, Page, PageRequest, fetch_page
from sales_api.query.patching import PatchRule, apply_patch, collect_updates
from sales_api.repository import Repository

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=Base)


class EntityNotFound(Exception):
    """A referenced entity does not exist"""

    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(f"{entity_name} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class DuplicateEntity(Exception):
    """The entity or link being created already exists"""


class EntityService(Generic[ModelT]):
    """
    List, get, create, patch and delete for one entity type.

    Subclasses declare ``model``, ``entity_name``, ``list_spec`` and
    ``patch_rules`` and implement ``build`` to turn a create payload into a
    new entity. Lookups return None for unknown ids so routers can answer 404
    before anything is modified.
    """

    model: type
    entity_name: str
    list_spec: ListSpec
    patch_rules: Mapping[str, PatchRule] = {}

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo: Repository[ModelT] = Repository(self.model, db)

    async def list(self, request: PageRequest, filters: Mapping[str, Any]) -> Page:
        return await fetch_page(self.repo, self.list_spec, request, filters)

    async def get(self, entity_id: int) -> Optional[ModelT]:
        return await self.repo.get(entity_id)

    def build(self, payload: BaseModel, actor: Optional[User]) -> ModelT:
        raise NotImplementedError

    async def create(self, payload: BaseModel, actor: Optional[User] = None) -> ModelT:
        entity = self.repo.add(self.build(payload, actor))
        await self.repo.commit()
        logger.info(f"{self.entity_name} created", id=entity.id)
        return await self.repo.reload(entity)

    async def patch(self, entity_id: int, payload: BaseModel) -> Optional[ModelT]:
        entity = await self.repo.get(entity_id)
        if entity is None:
            return None

        changed = apply_patch(entity, collect_updates(payload), self.patch_rules)
        await self.repo.commit()
        if not changed:
            return entity

        logger.info(f"{self.entity_name} updated", id=entity_id, fields=changed)
        return await self.repo.reload(entity)

    async def before_delete(self, entity: ModelT) -> None:
        """Hook for clearing references that the database may not cascade"""

    async def delete(self, entity_id: int) -> bool:
        entity = await self.repo.get(entity_id)
        if entity is None:
            return False

        await self.before_delete(entity)
        await self.repo.delete(entity)
        await self.repo.commit()
        logger.info(f"{self.entity_name} deleted", id=entity_id)
        return True
