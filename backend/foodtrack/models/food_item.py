from sqlalchemy import Column, String, Integer, Float

from foodtrack.database import Base, BaseMixin


class FoodItem(BaseMixin, Base):
    """Reference catalog entry. Read-only from the ledger's point of view."""

    __tablename__ = "food_items"

    name = Column(String, unique=True, index=True, nullable=False)
    category = Column(String, index=True)
    default_expiration_days = Column(Integer)
    average_cost = Column(Float)
    unit = Column(String)
