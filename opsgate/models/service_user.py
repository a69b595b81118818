"""ORM models for the service partition: service staff logins and their staff records."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from opsgate.models.base import Base, JSONList


class ServiceUser(Base):
    """
    Login account for service staff. Never shares rows with users.

    username is the employee id; email is a generated placeholder.
    """

    __tablename__ = "service_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="service-standard")
    department = Column(String(255), nullable=False, default="")
    page_access = Column(JSONList, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    staff_access = relationship("StaffAccess", back_populates="service_user", uselist=False)


class StaffAccess(Base):
    """Staff directory entry linked one-to-one to a ServiceUser."""

    __tablename__ = "staff_access"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_user_id = Column(
        Integer,
        ForeignKey("service_users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    name = Column(String(255), nullable=False)
    employee_id = Column(String(255), nullable=False, unique=True, index=True)
    department = Column(String(255), nullable=False)
    scope = Column(String(64), nullable=False, default="laundry")

    service_user = relationship("ServiceUser", back_populates="staff_access")
