from sqlalchemy import Column, String, Integer, JSON, CheckConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from foodtrack.database import Base, BaseMixin


class User(BaseMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("household_size >= 1", name="ck_users_household_size"),
    )

    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String)
    household_size = Column(Integer, nullable=False, default=1)
    dietary_preferences = Column(JSON().with_variant(JSONB(), "postgresql"), default=list)
    location = Column(String)

    inventory_items = relationship("InventoryItem", back_populates="user")
    consumption_logs = relationship("ConsumptionLog", back_populates="user")
