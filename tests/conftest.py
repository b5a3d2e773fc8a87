"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from familyplate.database import Base
from familyplate.plan import Meal
from familyplate.storage import MemoryCheckedStateStore

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Meal Fixtures
# =============================================================================


@pytest.fixture
def pancake_meals():
    """Two meals sharing flour, one with eggs."""
    return [
        Meal(name="Pancakes", ingredients=["2 cups flour", "1 cup flour"], meal_type="breakfast"),
        Meal(name="Omelette", ingredients=["3 eggs"], meal_type="breakfast"),
    ]


@pytest.fixture
def week_meals():
    """A few days of family meals across all meal types."""
    return [
        Meal(
            name="Overnight Oats",
            meal_type="breakfast",
            day="Monday",
            ingredients=["1 cup rolled oats", "1 cup milk", "1/2 cup blueberries", "1 tbsp honey"],
        ),
        Meal(
            name="Chicken Wraps",
            meal_type="lunch",
            day="Monday",
            ingredients=[
                "500g chicken breast",
                "4 tortillas",
                "1 head lettuce",
                "2 tomatoes, diced",
                "Salt to taste",
            ],
        ),
        Meal(
            name="Spaghetti Bolognese",
            meal_type="dinner",
            day="Monday",
            ingredients=[
                "400 g spaghetti",
                "500 g ground beef",
                "1 large onion, finely chopped",
                "2 cloves garlic, minced",
                "1 can tomato sauce",
                "2 tomatoes",
                "1 cup grated parmesan",
                "Salt to taste",
            ],
        ),
        Meal(
            name="Veggie Stir Fry",
            meal_type="dinner",
            day="Tuesday",
            ingredients=[
                "1 bell pepper",
                "2 carrots",
                "1 onion",
                "3 cloves garlic",
                "2 tbsp soy sauce",
                "1 cup frozen peas",
            ],
        ),
    ]


# =============================================================================
# Checked-State Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store():
    """Empty in-memory checked-state store."""
    return MemoryCheckedStateStore()


@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite engine with all tables.

    StaticPool keeps the single in-memory database alive across sessions.
    """
    from familyplate import models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_db_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(test_db_engine, expire_on_commit=False)
