import enum

from sqlalchemy import Column, String, Text, Enum

from foodtrack.database import Base, BaseMixin


class ResourceType(str, enum.Enum):
    TIP = "TIP"
    ARTICLE = "ARTICLE"
    VIDEO = "VIDEO"


class Resource(BaseMixin, Base):
    __tablename__ = "resources"

    title = Column(String, nullable=False)
    content = Column(Text)
    category_tag = Column(String, index=True)
    resource_type = Column(Enum(ResourceType, name="resource_type"), nullable=False, index=True)
