"""Tests for the reference catalog and resources."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from foodtrack.errors import InvalidArgument, NotFound
from foodtrack.models import FoodItem, ResourceType
from foodtrack.services import catalog, resources
from foodtrack.services import resources as resource_service


def test_find_food_item(db, milk) -> None:
    assert catalog.find_food_item(db, milk.id).name == "Milk"
    with pytest.raises(NotFound):
        catalog.find_food_item(db, uuid4())


def test_find_food_item_by_name_is_case_insensitive(db, milk) -> None:
    assert catalog.find_food_item_by_name(db, "  mILK ").id == milk.id
    assert catalog.find_food_item_by_name(db, "Cheese") is None


def test_list_food_items_filters(db, milk, bread) -> None:
    assert [i.name for i in catalog.list_food_items(db).all()] == ["Bread", "Milk"]
    assert [i.name for i in catalog.list_food_items(db, category="bakery").all()] == ["Bread"]
    assert [i.name for i in catalog.list_food_items(db, search="il").all()] == ["Milk"]


def test_default_expiration() -> None:
    bought = datetime(2030, 1, 1, tzinfo=timezone.utc)

    explicit = FoodItem(name="Eggs", category="dairy", default_expiration_days=21)
    by_category = FoodItem(name="Salmon", category="Seafood")
    unknown = FoodItem(name="Mystery", category="misc")

    assert catalog.default_expiration(explicit, bought) == bought + timedelta(days=21)
    assert catalog.default_expiration(by_category, bought) == bought + timedelta(days=3)
    assert catalog.default_expiration(unknown, bought) is None


def test_list_resources(db, resources) -> None:
    assert len(resources_list(db)) == 3
    assert [r.title for r in resources_list(db, category_tag="waste")] == ["Composting 101"]
    assert [r.title for r in resources_list(db, resource_type=ResourceType.VIDEO)] == ["Meal prep"]
    assert [r.title for r in resources_list(db, resource_type="article")] == ["Composting 101"]


def resources_list(db, **filters):
    return resources.list_resources(db, **filters).all()


def test_list_resources_rejects_unknown_type(db) -> None:
    with pytest.raises(InvalidArgument):
        resources.list_resources(db, resource_type="PODCAST")


def test_get_resource(db, resources) -> None:
    assert resource_service.get_resource(db, resources[0].id).title == "Freeze bread"
    with pytest.raises(NotFound):
        resource_service.get_resource(db, uuid4())
