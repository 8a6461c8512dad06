"""
Inventory Ledger — the only code that changes inventory quantities.

Every operation pairs exactly one inventory write with exactly one
consumption log entry and runs both through ``run_transaction``, so the
quantity change and its history commit together or not at all. Arguments
are validated before any database work starts.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from foodtrack.database import run_transaction, utcnow
from foodtrack.errors import (
    FoodtrackError, Forbidden, InsufficientQuantity, InvalidArgument, NotFound,
)
from foodtrack.models.consumption_log import ActionType, ConsumptionLog
from foodtrack.models.inventory import InventoryItem
from foodtrack.models.user import User
from foodtrack.services import catalog
from foodtrack.utils.coerce import parse_id, to_utc

logger = logging.getLogger(__name__)


@dataclass
class LedgerResult:
    item: InventoryItem
    log_entry: ConsumptionLog


def _validate_amount(value, field: str = "amount") -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} must be a number, got {value!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidArgument(f"{field} must be greater than 0, got {value!r}")
    return amount


def _clean(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.strip()
    return text or None


def _load_owned_item(db: Session, inventory_id, user_id, lock: bool = False) -> InventoryItem:
    q = db.query(InventoryItem).filter(InventoryItem.id == inventory_id)
    if lock:
        # Row lock on PostgreSQL; SQLite ignores it
        q = q.with_for_update()
    item = q.first()
    if item is None:
        raise NotFound("InventoryItem", inventory_id)
    if item.user_id != user_id:
        raise Forbidden("InventoryItem", inventory_id, user_id)
    return item


def _append_log(
    db: Session,
    user_id,
    food_name: str,
    action: ActionType,
    quantity: float,
    reason: str | None = None,
) -> ConsumptionLog:
    entry = ConsumptionLog(
        user_id=user_id,
        food_name=food_name,
        action_type=action,
        quantity=quantity,
        reason=reason,
        log_date=utcnow(),
    )
    db.add(entry)
    return entry


def _draw_down(
    db: Session,
    inventory_id,
    user_id,
    amount: float,
    action: ActionType,
    reason: str | None,
) -> LedgerResult:
    item = _load_owned_item(db, inventory_id, user_id, lock=True)
    available = item.quantity or 0.0
    if amount > available:
        raise InsufficientQuantity(item.id, amount, available)
    # Conditional decrement: SQLite ignores FOR UPDATE, so the quantity read
    # above may already be stale by the time this runs
    updated = db.execute(
        update(InventoryItem)
        .where(
            InventoryItem.id == item.id,
            InventoryItem.user_id == user_id,
            InventoryItem.quantity >= amount,
        )
        .values(quantity=InventoryItem.quantity - amount, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if updated.rowcount == 0:
        current = db.query(InventoryItem.quantity).filter(InventoryItem.id == item.id).scalar()
        if current is None:
            raise NotFound("InventoryItem", inventory_id)
        raise InsufficientQuantity(item.id, amount, current)
    db.refresh(item)
    entry = _append_log(db, user_id, item.custom_name, action, amount, reason)
    return LedgerResult(item=item, log_entry=entry)


def _run_draw_down(
    db: Session,
    action: ActionType,
    inventory_id,
    user_id,
    amount,
    reason: str | None,
    timeout: float | None,
) -> LedgerResult:
    inventory_id = parse_id(inventory_id, "inventory_id")
    user_id = parse_id(user_id, "user_id")
    amount = _validate_amount(amount)
    try:
        result = run_transaction(
            db,
            lambda tx: _draw_down(tx, inventory_id, user_id, amount, action, reason),
            timeout=timeout,
        )
    except FoodtrackError as e:
        logger.warning(f"{action.value} {amount:g} from inventory item {inventory_id} failed: {e}")
        raise
    logger.info(
        f"{action.value} {amount:g} {result.item.unit or ''} of '{result.item.custom_name}' "
        f"(item {inventory_id}, {result.item.quantity:g} left)"
    )
    return result


def consume(
    db: Session,
    inventory_id,
    user_id,
    amount: float,
    reason: str | None = None,
    timeout: float | None = None,
) -> LedgerResult:
    """Take ``amount`` out of a lot and log it as CONSUMED."""
    return _run_draw_down(
        db, ActionType.CONSUMED, inventory_id, user_id, amount, _clean(reason), timeout,
    )


def waste(
    db: Session,
    inventory_id,
    user_id,
    amount: float,
    reason: str | None,
    timeout: float | None = None,
) -> LedgerResult:
    """Take ``amount`` out of a lot and log it as WASTED. A reason is required."""
    reason = _clean(reason)
    if reason is None:
        raise InvalidArgument("reason is required when logging waste")
    return _run_draw_down(
        db, ActionType.WASTED, inventory_id, user_id, amount, reason, timeout,
    )


def donate(
    db: Session,
    inventory_id,
    user_id,
    amount: float,
    reason: str | None = None,
    timeout: float | None = None,
) -> LedgerResult:
    """Take ``amount`` out of a lot and log it as DONATED."""
    return _run_draw_down(
        db, ActionType.DONATED, inventory_id, user_id, amount, _clean(reason), timeout,
    )


def purchase(
    db: Session,
    user_id,
    *,
    quantity: float,
    name: str | None = None,
    unit: str | None = None,
    food_item_id=None,
    purchase_date: date | datetime | None = None,
    expiration_date: date | datetime | None = None,
    source_image_url: str | None = None,
    ai_metadata: dict | None = None,
    timeout: float | None = None,
) -> LedgerResult:
    """
    Record a purchase as a new lot plus a PURCHASED log entry.

    Purchases never merge into an existing lot of the same name, so each lot
    keeps its own expiration date. When ``food_item_id`` is given the catalog
    entry supplies the name, unit and expiration the caller left out.
    """
    user_id = parse_id(user_id, "user_id")
    quantity = _validate_amount(quantity, "quantity")
    name = _clean(name)
    unit = _clean(unit)
    if food_item_id is None:
        if name is None:
            raise InvalidArgument("name is required when no food item is referenced")
        if unit is None:
            raise InvalidArgument("unit is required when no food item is referenced")
    else:
        food_item_id = parse_id(food_item_id, "food_item_id")
    purchased_at = to_utc(purchase_date) or utcnow()
    # A plain date means the lot is good through the end of that day
    expires_at = to_utc(expiration_date, end_of_day=True)

    def create(tx: Session) -> LedgerResult:
        if tx.get(User, user_id) is None:
            raise NotFound("User", user_id)
        lot_name, lot_unit, lot_expires = name, unit, expires_at
        if food_item_id is not None:
            food_item = catalog.find_food_item(tx, food_item_id)
            lot_name = lot_name or food_item.name
            lot_unit = lot_unit or food_item.unit
            if lot_expires is None:
                lot_expires = catalog.default_expiration(food_item, purchased_at)
        if lot_unit is None:
            raise InvalidArgument("unit is required: the referenced food item has no default unit")
        if lot_expires is not None and lot_expires.date() < purchased_at.date():
            raise InvalidArgument("expiration_date cannot be before purchase_date")

        item = InventoryItem(
            user_id=user_id,
            food_item_id=food_item_id,
            custom_name=lot_name,
            quantity=quantity,
            unit=lot_unit,
            purchase_date=purchased_at,
            expiration_date=lot_expires,
            source_image_url=source_image_url,
            ai_metadata=ai_metadata or {},
        )
        tx.add(item)
        tx.flush()
        entry = _append_log(tx, user_id, lot_name, ActionType.PURCHASED, quantity)
        return LedgerResult(item=item, log_entry=entry)

    try:
        result = run_transaction(db, create, timeout=timeout)
    except FoodtrackError as e:
        logger.warning(f"Purchase of {quantity:g} for user {user_id} failed: {e}")
        raise
    logger.info(
        f"PURCHASED {quantity:g} {result.item.unit} of '{result.item.custom_name}' "
        f"(item {result.item.id}, user {user_id})"
    )
    return result


def remove(db: Session, inventory_id, user_id, timeout: float | None = None) -> InventoryItem:
    """Delete a lot outright. Its log history is left untouched."""
    inventory_id = parse_id(inventory_id, "inventory_id")
    user_id = parse_id(user_id, "user_id")

    def delete(tx: Session) -> InventoryItem:
        item = _load_owned_item(tx, inventory_id, user_id, lock=True)
        tx.delete(item)
        return item

    item = run_transaction(db, delete, timeout=timeout)
    logger.info(f"Removed inventory item {inventory_id} for user {user_id}")
    return item
