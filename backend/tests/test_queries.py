"""Tests for the read-only query service."""

from datetime import date, datetime, timedelta, timezone

import pytest

from foodtrack.errors import Forbidden, InvalidArgument, NotFound
from foodtrack.models import ActionType, ConsumptionLog
from foodtrack.services import ledger, queries

NOW = datetime(2030, 3, 10, 12, 0, tzinfo=timezone.utc)


def _lot(db, user, name, expires=None, quantity=1, **kwargs):
    return ledger.purchase(
        db, user.id, name=name, unit="pcs", quantity=quantity,
        purchase_date=NOW - timedelta(days=30), expiration_date=expires, **kwargs,
    ).item


def _log(db, user, action, quantity, when):
    db.add(ConsumptionLog(
        user_id=user.id, food_name="Apple", action_type=action,
        quantity=quantity, log_date=when,
    ))
    db.commit()


def test_expiring_soon_window_is_inclusive_and_ordered(db, user) -> None:
    _lot(db, user, "later", NOW + timedelta(days=3))
    _lot(db, user, "edge", NOW + timedelta(days=3, hours=0))
    _lot(db, user, "now", NOW)
    _lot(db, user, "tomorrow", NOW + timedelta(days=1))
    _lot(db, user, "outside", NOW + timedelta(days=3, seconds=1))
    _lot(db, user, "expired", NOW - timedelta(seconds=1))
    _lot(db, user, "no date")

    rows = queries.expiring_soon(db, user.id, 3, now=NOW)

    names = [r["item_name"] for r in rows]
    assert names[:2] == ["now", "tomorrow"]
    assert sorted(names[2:]) == ["edge", "later"]
    assert "outside" not in names
    assert "expired" not in names
    assert "no date" not in names


def test_expiring_soon_ties_break_by_id(db, user) -> None:
    when = NOW + timedelta(days=1)
    a = _lot(db, user, "a", when)
    b = _lot(db, user, "b", when)

    rows = queries.expiring_soon(db, user.id, 2, now=NOW)

    assert [r["id"] for r in rows] == sorted([a.id, b.id])


def test_expiring_soon_zero_days_only_exact_now(db, user) -> None:
    _lot(db, user, "now", NOW)
    _lot(db, user, "soon", NOW + timedelta(minutes=1))
    _lot(db, user, "no date")

    rows = queries.expiring_soon(db, user.id, 0, now=NOW)

    assert [r["item_name"] for r in rows] == ["now"]
    assert rows[0]["days_until_expiry"] == 0


def test_expiring_soon_enriches_with_catalog(db, user, milk) -> None:
    ledger.purchase(
        db, user.id, quantity=1, food_item_id=milk.id, name="Skimmed",
        purchase_date=NOW - timedelta(days=1), expiration_date=NOW + timedelta(days=2),
    )
    _lot(db, user, "Loose apples", NOW + timedelta(days=1))

    rows = queries.expiring_soon(db, user.id, 7, now=NOW)

    by_name = {r["item_name"]: r for r in rows}
    assert by_name["Skimmed"]["food_item_name"] == "Milk"
    assert by_name["Skimmed"]["user_email"] == "ana@example.com"
    assert by_name["Skimmed"]["food_item_category"] == "dairy"
    assert by_name["Skimmed"]["days_until_expiry"] == 2
    assert by_name["Loose apples"]["food_item_name"] is None


def test_expiring_soon_only_returns_own_items(db, user, other_user) -> None:
    _lot(db, other_user, "theirs", NOW + timedelta(days=1))

    assert queries.expiring_soon(db, user.id, 7, now=NOW) == []


def test_expiring_soon_rejects_negative_window(db, user) -> None:
    with pytest.raises(InvalidArgument):
        queries.expiring_soon(db, user.id, -1, now=NOW)


def test_consumption_stats_zero_when_empty(db, user) -> None:
    stats = queries.consumption_stats(db, user.id, date(2030, 1, 1), date(2030, 1, 31))

    assert stats["purchased"] == 0
    assert stats["consumed"] == 0
    assert stats["wasted"] == 0
    assert stats["donated"] == 0
    assert stats["consumed_quantity"] == 0
    assert stats["wasted_quantity"] == 0
    assert stats["total_entries"] == 0


def test_consumption_stats_counts_and_sums(db, user, other_user) -> None:
    day = datetime(2030, 1, 15, 10, tzinfo=timezone.utc)
    _log(db, user, ActionType.PURCHASED, 5, day)
    _log(db, user, ActionType.CONSUMED, 1.5, day)
    _log(db, user, ActionType.CONSUMED, 2, day + timedelta(hours=1))
    _log(db, user, ActionType.WASTED, 0.5, day + timedelta(hours=2))
    _log(db, user, ActionType.DONATED, 1, day + timedelta(hours=3))
    _log(db, user, ActionType.CONSUMED, 9, datetime(2030, 2, 1, tzinfo=timezone.utc))
    _log(db, other_user, ActionType.WASTED, 7, day)

    stats = queries.consumption_stats(db, user.id, date(2030, 1, 1), date(2030, 1, 31))

    assert stats["purchased"] == 1
    assert stats["consumed"] == 2
    assert stats["wasted"] == 1
    assert stats["donated"] == 1
    assert stats["consumed_quantity"] == 3.5
    assert stats["wasted_quantity"] == 0.5
    assert stats["total_entries"] == 5


def test_consumption_stats_date_range_is_inclusive(db, user) -> None:
    _log(db, user, ActionType.CONSUMED, 1, datetime(2030, 1, 1, 0, 0, tzinfo=timezone.utc))
    _log(db, user, ActionType.CONSUMED, 1, datetime(2030, 1, 31, 23, 59, tzinfo=timezone.utc))

    stats = queries.consumption_stats(db, user.id, date(2030, 1, 1), date(2030, 1, 31))

    assert stats["consumed"] == 2


def test_consumption_stats_single_day(db, user) -> None:
    _log(db, user, ActionType.WASTED, 2, datetime(2030, 1, 5, 18, tzinfo=timezone.utc))

    stats = queries.consumption_stats(db, user.id, date(2030, 1, 5), date(2030, 1, 5))

    assert stats["wasted"] == 1
    assert stats["wasted_quantity"] == 2


def test_consumption_stats_rejects_inverted_range(db, user) -> None:
    with pytest.raises(InvalidArgument):
        queries.consumption_stats(db, user.id, date(2030, 2, 1), date(2030, 1, 1))


def test_user_summary(db, user) -> None:
    _log(db, user, ActionType.PURCHASED, 3, datetime(2030, 1, 1, tzinfo=timezone.utc))
    _log(db, user, ActionType.WASTED, 1, datetime(2030, 1, 2, tzinfo=timezone.utc))
    _log(db, user, ActionType.WASTED, 0.5, datetime(2030, 1, 3, tzinfo=timezone.utc))

    summary = queries.user_summary(db, user.id)

    assert summary["total_purchased"] == 1
    assert summary["total_consumed"] == 0
    assert summary["total_wasted"] == 2
    assert summary["total_donated"] == 0
    assert summary["total_waste_quantity"] == 1.5
    assert summary["last_log_date"] == datetime(2030, 1, 3, tzinfo=timezone.utc)


def test_user_summary_without_history(db, user) -> None:
    summary = queries.user_summary(db, user.id)

    assert summary["total_purchased"] == 0
    assert summary["last_log_date"] is None


def test_list_inventory_can_hide_empty_lots(db, user) -> None:
    full = _lot(db, user, "full", quantity=2)
    empty = _lot(db, user, "empty", quantity=1)
    ledger.consume(db, empty.id, user.id, 1)

    assert {i.id for i in queries.list_inventory(db, user.id).all()} == {full.id, empty.id}
    assert [i.id for i in queries.list_inventory(db, user.id, include_empty=False).all()] == [full.id]


def test_get_inventory_item_checks_owner(db, user, other_user) -> None:
    lot = _lot(db, user, "mine")

    assert queries.get_inventory_item(db, lot.id, user.id).id == lot.id
    with pytest.raises(Forbidden):
        queries.get_inventory_item(db, lot.id, other_user.id)
    with pytest.raises(NotFound):
        queries.get_inventory_item(db, other_user.id, user.id)


def test_list_log_entries_filters_by_action(db, user) -> None:
    lot = _lot(db, user, "apples", quantity=5)
    ledger.consume(db, lot.id, user.id, 1)
    ledger.waste(db, lot.id, user.id, 1, "bruised")

    wasted = queries.list_log_entries(db, user.id, action_type=ActionType.WASTED).all()

    assert [e.reason for e in wasted] == ["bruised"]
    assert queries.list_log_entries(db, user.id).count() == 3
