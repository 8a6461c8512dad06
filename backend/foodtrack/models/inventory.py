from sqlalchemy import Column, String, Float, ForeignKey, Index, JSON, CheckConstraint, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from foodtrack.database import Base, BaseMixin, UTCDateTime


class InventoryItem(BaseMixin, Base):
    """One purchased lot of food owned by a user."""

    __tablename__ = "inventory"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        Index("ix_inventory_user_id_expiration_date", "user_id", "expiration_date"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # Weak reference: the lot keeps its own name if the catalog entry goes away
    food_item_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("food_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    custom_name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String)
    purchase_date = Column(UTCDateTime, index=True)
    expiration_date = Column(UTCDateTime, index=True)
    source_image_url = Column(String)
    ai_metadata = Column(JSON().with_variant(JSONB(), "postgresql"), default=dict)

    user = relationship("User", back_populates="inventory_items")
    food_item = relationship("FoodItem")
