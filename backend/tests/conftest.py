"""Shared test fixtures."""

import os

# Must be set before foodtrack reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import foodtrack.models  # noqa: F401  register all tables
from foodtrack.database import Base, build_engine, get_db
from foodtrack.models import FoodItem, Resource, ResourceType, User


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


def _add(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def user(db) -> User:
    return _add(db, User(email="ana@example.com", full_name="Ana", household_size=3))


@pytest.fixture
def other_user(db) -> User:
    return _add(db, User(email="ben@example.com", household_size=1))


@pytest.fixture
def milk(db) -> FoodItem:
    return _add(db, FoodItem(
        name="Milk", category="dairy", default_expiration_days=7,
        average_cost=1.2, unit="liter",
    ))


@pytest.fixture
def bread(db) -> FoodItem:
    # No explicit offset: falls back to the category shelf life
    return _add(db, FoodItem(name="Bread", category="bakery", unit="loaf"))


@pytest.fixture
def resources(db) -> list[Resource]:
    return [
        _add(db, Resource(title="Freeze bread", content="Slice first.",
                          category_tag="storage", resource_type=ResourceType.TIP)),
        _add(db, Resource(title="Composting 101", content="...",
                          category_tag="waste", resource_type=ResourceType.ARTICLE)),
        _add(db, Resource(title="Meal prep", content="https://video.example/1",
                          category_tag="planning", resource_type=ResourceType.VIDEO)),
    ]


@pytest.fixture
def client(db):
    from foodtrack.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user) -> dict:
    return {"X-User-Id": str(user.id)}
