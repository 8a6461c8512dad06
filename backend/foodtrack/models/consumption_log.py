import enum

from sqlalchemy import Column, String, Float, Text, ForeignKey, Index, Enum, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from foodtrack.database import Base, BaseMixin, UTCDateTime, utcnow


class ActionType(str, enum.Enum):
    PURCHASED = "PURCHASED"
    CONSUMED = "CONSUMED"
    WASTED = "WASTED"
    DONATED = "DONATED"


class ConsumptionLog(BaseMixin, Base):
    """Append-only history of what happened to a user's food."""

    __tablename__ = "consumption_logs"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_consumption_logs_quantity_non_negative"),
        Index("ix_consumption_logs_user_id_log_date", "user_id", "log_date"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # Snapshot, so history survives renames and deletions
    food_name = Column(String)
    action_type = Column(Enum(ActionType, name="action_type"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    reason = Column(Text)
    log_date = Column(UTCDateTime, default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="consumption_logs")
