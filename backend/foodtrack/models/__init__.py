from foodtrack.models.user import User
from foodtrack.models.food_item import FoodItem
from foodtrack.models.inventory import InventoryItem
from foodtrack.models.consumption_log import ActionType, ConsumptionLog
from foodtrack.models.resource import Resource, ResourceType

__all__ = [
    "User", "FoodItem", "InventoryItem",
    "ActionType", "ConsumptionLog",
    "Resource", "ResourceType",
]
