"""Authorization graph: roles, permissions and their links"""

import enum
from sqlalchemy import Column, String, BigInteger, ForeignKey, Text, Enum, UniqueConstraint

from sales_api.database import Base, BigIntPK, TZDateTime, utcnow


class RecordStatus(str, enum.Enum):
    """Activation state shared by authorization records"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Role(Base):
    """Named bundle of permissions within a business"""
    __tablename__ = "roles"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    business_id = Column(BigInteger, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(
        Enum(RecordStatus, native_enum=False, length=32),
        nullable=False,
        default=RecordStatus.ACTIVE,
    )
    created_at = Column(TZDateTime, nullable=False, default=utcnow)
    updated_at = Column(TZDateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Permission(Base):
    """A single grantable capability, addressed by code"""
    __tablename__ = "permissions"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    code = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    created_at = Column(TZDateTime, nullable=False, default=utcnow)


class RolePermission(Base):
    """Role <-> Permission link"""
    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
    )

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    role_id = Column(BigInteger, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    permission_id = Column(
        BigInteger, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(TZDateTime, nullable=False, default=utcnow)
    updated_at = Column(TZDateTime, nullable=False, default=utcnow, onupdate=utcnow)


class UserRole(Base):
    """User <-> Role assignment"""
    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(BigInteger, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at = Column(TZDateTime, nullable=False, default=utcnow)
