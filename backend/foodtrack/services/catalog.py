"""
Reference catalog — read-only lookups over the shared food item list.

Purchases use it to default a lot's name, unit and expiration date.
"""

from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from foodtrack.errors import NotFound
from foodtrack.models.food_item import FoodItem


# ── Category shelf-life defaults (sealed, in days) ────────────────

DEFAULT_SHELF_LIFE_DAYS = {
    "produce": 7,
    "fruit": 7,
    "vegetable": 7,
    "dairy": 14,
    "bakery": 5,
    "meat": 5,
    "seafood": 3,
    "grains": 365,
    "spices": 730,
    "canned": 730,
    "frozen": 180,
    "condiments": 365,
    "beverages": 365,
    "snacks": 90,
    "oils": 365,
}


def find_food_item(db: Session, food_item_id) -> FoodItem:
    item = db.get(FoodItem, food_item_id)
    if item is None:
        raise NotFound("FoodItem", food_item_id)
    return item


def find_food_item_by_name(db: Session, name: str) -> FoodItem | None:
    return db.query(FoodItem).filter(
        func.lower(FoodItem.name) == name.strip().lower()
    ).first()


def list_food_items(db: Session, category: str | None = None, search: str | None = None):
    q = db.query(FoodItem)
    if category:
        q = q.filter(FoodItem.category == category)
    if search:
        q = q.filter(FoodItem.name.ilike(f"%{search}%"))
    return q.order_by(FoodItem.name.asc())


def shelf_life_days(food_item: FoodItem) -> int | None:
    """Explicit offset on the item first, then the category default."""
    if food_item.default_expiration_days is not None:
        return food_item.default_expiration_days
    return DEFAULT_SHELF_LIFE_DAYS.get((food_item.category or "").lower())


def default_expiration(food_item: FoodItem, purchase_date: datetime) -> datetime | None:
    days = shelf_life_days(food_item)
    if days is None:
        return None
    return purchase_date + timedelta(days=days)
