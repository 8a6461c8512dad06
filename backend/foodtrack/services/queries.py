"""
Query service — read-only views over inventory and the consumption log.

Nothing here writes or opens an explicit transaction; isolation of
concurrent ledger writes is left to the database.
"""

from datetime import date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from foodtrack.database import utcnow
from foodtrack.errors import Forbidden, InvalidArgument, NotFound
from foodtrack.models.consumption_log import ActionType, ConsumptionLog
from foodtrack.models.food_item import FoodItem
from foodtrack.models.inventory import InventoryItem
from foodtrack.models.user import User
from foodtrack.utils.coerce import parse_id, to_utc

SECONDS_PER_DAY = 86400


def expiring_soon(db: Session, user_id, within_days: int, now: datetime | None = None) -> list[dict]:
    """
    Lots expiring in ``[now, now + within_days]`` (both ends inclusive),
    earliest first. Lots without an expiration date never show up.
    """
    user_id = parse_id(user_id, "user_id")
    if within_days is None or within_days < 0:
        raise InvalidArgument(f"within_days must be >= 0, got {within_days!r}")
    now = to_utc(now) or utcnow()
    cutoff = now + timedelta(days=within_days)

    rows = (
        db.query(InventoryItem, User.email, FoodItem.name, FoodItem.category)
        .join(User, InventoryItem.user_id == User.id)
        .outerjoin(FoodItem, InventoryItem.food_item_id == FoodItem.id)
        .filter(
            InventoryItem.user_id == user_id,
            InventoryItem.expiration_date.isnot(None),
            InventoryItem.expiration_date >= now,
            InventoryItem.expiration_date <= cutoff,
        )
        .order_by(InventoryItem.expiration_date.asc(), InventoryItem.id.asc())
        .all()
    )

    return [
        {
            "id": item.id,
            "user_id": item.user_id,
            "user_email": email,
            "item_name": item.custom_name,
            "food_item_id": item.food_item_id,
            "food_item_name": food_name,
            "food_item_category": food_category,
            "quantity": item.quantity,
            "unit": item.unit,
            "expiration_date": item.expiration_date,
            "days_until_expiry": round(
                (item.expiration_date - now).total_seconds() / SECONDS_PER_DAY, 2
            ),
        }
        for item, email, food_name, food_category in rows
    ]


def _empty_counts() -> dict:
    return {
        "purchased": 0,
        "consumed": 0,
        "wasted": 0,
        "donated": 0,
    }


def consumption_stats(
    db: Session,
    user_id,
    start_date: date | datetime,
    end_date: date | datetime,
) -> dict:
    """
    Log entry counts per action kind within an inclusive range, plus the
    consumed and wasted quantities. Every field is present, zero if nothing
    matches. Plain dates cover the whole day.
    """
    user_id = parse_id(user_id, "user_id")
    if start_date is None or end_date is None:
        raise InvalidArgument("start_date and end_date are required")
    start = to_utc(start_date)
    end = to_utc(end_date, end_of_day=True)
    if start > end:
        raise InvalidArgument(f"start_date {start_date} is after end_date {end_date}")

    rows = (
        db.query(
            ConsumptionLog.action_type,
            func.count(ConsumptionLog.id),
            func.coalesce(func.sum(ConsumptionLog.quantity), 0.0),
        )
        .filter(
            ConsumptionLog.user_id == user_id,
            ConsumptionLog.log_date >= start,
            ConsumptionLog.log_date <= end,
        )
        .group_by(ConsumptionLog.action_type)
        .all()
    )

    counts = _empty_counts()
    quantities = {action: 0.0 for action in ActionType}
    for action, count, total in rows:
        counts[action.value.lower()] = count
        quantities[action] = float(total)

    return {
        "start_date": start,
        "end_date": end,
        **counts,
        "consumed_quantity": quantities[ActionType.CONSUMED],
        "wasted_quantity": quantities[ActionType.WASTED],
        "total_entries": sum(counts.values()),
    }


def user_summary(db: Session, user_id) -> dict:
    """Lifetime totals for a user: counts per kind, wasted quantity, last activity."""
    user_id = parse_id(user_id, "user_id")
    rows = (
        db.query(
            ConsumptionLog.action_type,
            func.count(ConsumptionLog.id),
            func.coalesce(func.sum(ConsumptionLog.quantity), 0.0),
            func.max(ConsumptionLog.log_date),
        )
        .filter(ConsumptionLog.user_id == user_id)
        .group_by(ConsumptionLog.action_type)
        .all()
    )

    counts = _empty_counts()
    waste_qty = 0.0
    last_log_date = None
    for action, count, total, latest in rows:
        counts[action.value.lower()] = count
        if action == ActionType.WASTED:
            waste_qty = float(total)
        if latest is not None and (last_log_date is None or latest > last_log_date):
            last_log_date = latest

    return {
        "user_id": user_id,
        "total_purchased": counts["purchased"],
        "total_consumed": counts["consumed"],
        "total_wasted": counts["wasted"],
        "total_donated": counts["donated"],
        "total_waste_quantity": waste_qty,
        "last_log_date": to_utc(last_log_date),
    }


def list_inventory(db: Session, user_id, include_empty: bool = True):
    user_id = parse_id(user_id, "user_id")
    q = db.query(InventoryItem).filter(InventoryItem.user_id == user_id)
    if not include_empty:
        q = q.filter(InventoryItem.quantity > 0)
    return q.order_by(InventoryItem.created_at.asc(), InventoryItem.id.asc())


def get_inventory_item(db: Session, inventory_id, user_id) -> InventoryItem:
    inventory_id = parse_id(inventory_id, "inventory_id")
    user_id = parse_id(user_id, "user_id")
    item = db.get(InventoryItem, inventory_id)
    if item is None:
        raise NotFound("InventoryItem", inventory_id)
    if item.user_id != user_id:
        raise Forbidden("InventoryItem", inventory_id, user_id)
    return item


def list_log_entries(
    db: Session,
    user_id,
    action_type: ActionType | None = None,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
):
    user_id = parse_id(user_id, "user_id")
    start = to_utc(start)
    end = to_utc(end, end_of_day=True)
    if start is not None and end is not None and start > end:
        raise InvalidArgument("start is after end")
    q = db.query(ConsumptionLog).filter(ConsumptionLog.user_id == user_id)
    if action_type is not None:
        q = q.filter(ConsumptionLog.action_type == action_type)
    if start is not None:
        q = q.filter(ConsumptionLog.log_date >= start)
    if end is not None:
        q = q.filter(ConsumptionLog.log_date <= end)
    return q.order_by(ConsumptionLog.log_date.desc(), ConsumptionLog.id.asc())
