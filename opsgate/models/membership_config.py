"""ORM model for the pages each membership tier unlocks."""

from sqlalchemy import Column, Float, Integer, String

from opsgate.models.base import Base, JSONList


class MembershipConfig(Base):
    __tablename__ = "membership_configs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    level = Column(String(32), nullable=False, unique=True)
    pages = Column(JSONList, nullable=False, default=list)
    monthly_price = Column(Float, nullable=False)
