"""ORM model for core platform users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from opsgate.models.base import Base, JSONList


class User(Base):
    """
    Core user account for JWT authentication and role-based access control.

    role: 'pending', 'standard', 'admin' or 'superadmin'
    membership: 'none', 'standard', 'platinum' or 'vip'
    page_access: list of page slugs; 'all' grants every page
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="pending")
    membership = Column(String(32), nullable=False, default="none")
    page_access = Column(JSONList, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
