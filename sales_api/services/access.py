"""
Role and permission services.

Roles and permissions are plain entities listed through the same pipeline
as reservations and tables. Links between them (and between users and
roles) are separate rows addressed by id pairs; ``AccessService`` manages
those links and answers permission checks with explicit join queries.
"""

from typing import List, Optional

import structlog
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError

from sales_api.database import utcnow
from sales_api.models.access import Role, Permission, RolePermission, UserRole, RecordStatus
from sales_api.models.user import User
from sales_api.query.enums import parse_or_ignore
from sales_api.query.listing import ListSpec, ContainsFilter, EqualsFilter, EnumFilter
from sales_api.query import patching
from sales_api.repository import Repository
from sales_api.schemas.access import RoleCreate, PermissionCreate
from sales_api.services.base import EntityService, EntityNotFound, DuplicateEntity

logger = structlog.get_logger()

MANAGE_ROLES = "roles:manage"


class RoleService(EntityService[Role]):
    model = Role
    entity_name = "Role"

    list_spec = ListSpec(
        model=Role,
        filters={
            "title": ContainsFilter(Role.title),
            "status": EnumFilter(Role.status, RecordStatus),
            "business_id": EqualsFilter(Role.business_id),
        },
        sort_keys={
            "title": Role.title,
            "createdAt": Role.created_at,
            "updatedAt": Role.updated_at,
            "status": Role.status,
        },
        default_sort="title",
    )

    patch_rules = {
        "business_id": patching.REQUIRED,
        "title": patching.TEXT,
        "description": patching.OPTIONAL_TEXT,
        "status": patching.enum_rule(RecordStatus),
    }

    def build(self, payload: RoleCreate, actor: Optional[User]) -> Role:
        now = utcnow()
        return Role(
            business_id=payload.business_id,
            title=payload.title,
            description=payload.description,
            status=parse_or_ignore(RecordStatus, payload.status) or RecordStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    async def before_delete(self, entity: Role) -> None:
        await self.db.execute(delete(RolePermission).where(RolePermission.role_id == entity.id))
        await self.db.execute(delete(UserRole).where(UserRole.role_id == entity.id))


class PermissionService(EntityService[Permission]):
    model = Permission
    entity_name = "Permission"

    list_spec = ListSpec(
        model=Permission,
        filters={
            "code": ContainsFilter(Permission.code),
        },
        sort_keys={
            "code": Permission.code,
            "createdAt": Permission.created_at,
        },
        default_sort="code",
    )

    def build(self, payload: PermissionCreate, actor: Optional[User]) -> Permission:
        return Permission(
            code=payload.code,
            description=payload.description,
            created_at=utcnow(),
        )

    async def create(self, payload: PermissionCreate, actor: Optional[User] = None) -> Permission:
        if await self.repo.find_one(Permission.code == payload.code):
            raise DuplicateEntity(f"Permission '{payload.code}' already exists")
        return await super().create(payload, actor)


class AccessService:
    """Role-permission links, user-role assignments and permission checks"""

    def __init__(self, db):
        self.db = db
        self.roles = Repository(Role, db)
        self.permissions = Repository(Permission, db)
        self.users = Repository(User, db)
        self.role_permissions = Repository(RolePermission, db)
        self.user_roles = Repository(UserRole, db)

    async def _require(self, repo: Repository, entity_id: int):
        entity = await repo.get(entity_id)
        if entity is None:
            raise EntityNotFound(repo.model.__name__, entity_id)
        return entity

    async def _insert_link(self, repo: Repository, link):
        repo.add(link)
        try:
            await repo.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same pair
            await repo.rollback()
            raise DuplicateEntity(f"{repo.model.__name__} already exists")
        return await repo.reload(link)

    # Role -> permissions

    async def role_permission_list(self, role_id: int) -> List[Permission]:
        await self._require(self.roles, role_id)
        result = await self.db.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.code)
        )
        return list(result.scalars().all())

    async def grant_permission(self, role_id: int, permission_id: int) -> RolePermission:
        await self._require(self.roles, role_id)
        await self._require(self.permissions, permission_id)

        existing = await self.role_permissions.find_one(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        if existing is not None:
            logger.info("Permission already granted", role_id=role_id, permission_id=permission_id)
            raise DuplicateEntity("Permission already granted to role")

        now = utcnow()
        link = await self._insert_link(
            self.role_permissions,
            RolePermission(role_id=role_id, permission_id=permission_id, created_at=now, updated_at=now),
        )
        logger.info("Permission granted", role_id=role_id, permission_id=permission_id)
        return link

    async def revoke_permission(self, role_id: int, permission_id: int) -> bool:
        link = await self.role_permissions.find_one(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        if link is None:
            return False
        await self.role_permissions.delete(link)
        await self.role_permissions.commit()
        logger.info("Permission revoked", role_id=role_id, permission_id=permission_id)
        return True

    # User -> roles

    async def user_role_list(self, user_id: int) -> List[Role]:
        await self._require(self.users, user_id)
        result = await self.db.execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.title)
        )
        return list(result.scalars().all())

    async def assign_role(self, user_id: int, role_id: int) -> UserRole:
        await self._require(self.users, user_id)
        await self._require(self.roles, role_id)

        existing = await self.user_roles.find_one(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
        )
        if existing is not None:
            logger.info("Role already assigned", user_id=user_id, role_id=role_id)
            raise DuplicateEntity("Role already assigned to user")

        assignment = await self._insert_link(
            self.user_roles,
            UserRole(user_id=user_id, role_id=role_id, assigned_at=utcnow()),
        )
        logger.info("Role assigned", user_id=user_id, role_id=role_id)
        return assignment

    async def unassign_role(self, user_id: int, role_id: int) -> bool:
        assignment = await self.user_roles.find_one(
            UserRole.user_id == user_id,
            UserRole.role_id == role_id,
        )
        if assignment is None:
            return False
        await self.user_roles.delete(assignment)
        await self.user_roles.commit()
        logger.info("Role unassigned", user_id=user_id, role_id=role_id)
        return True

    # Checks

    async def has_permission(self, user: User, code: str) -> bool:
        """Superusers pass; others need the code through an active role"""
        if user.is_superuser:
            return True

        result = await self.db.execute(
            select(func.count(Permission.id))
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(
                UserRole.user_id == user.id,
                Role.status == RecordStatus.ACTIVE,
                Permission.code == code,
            )
        )
        return (result.scalar() or 0) > 0
