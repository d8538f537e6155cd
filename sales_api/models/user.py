"""User model for dashboard authentication"""

from sqlalchemy import Column, String, Boolean, BigInteger

from sales_api.database import Base, BigIntPK, TZDateTime, utcnow


class User(Base):
    """Dashboard users"""
    __tablename__ = "users"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    business_id = Column(BigInteger, index=True)

    # Authentication
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    full_name = Column(String(255))

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)

    # Tokens
    refresh_token = Column(String(500))

    # Timestamps
    last_login = Column(TZDateTime)
    created_at = Column(TZDateTime, default=utcnow)
    updated_at = Column(TZDateTime, default=utcnow, onupdate=utcnow)
