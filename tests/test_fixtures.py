"""
Shared test helpers for the Food Catalog test suite.

Factories for request payloads and materialized foods, plus a plain
TestClient for tests that monkeypatch the service layer.
"""

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from domain.schemas.food_schemas import FoodCreate, FoodRead, FoodUpdate, IngredientRead
from main import app

# Storage failures surface as 500 responses instead of being re-raised in the test
client = TestClient(app, raise_server_exceptions=False)


def _names(ingredients):
    return [{"name": n} for n in ingredients] if ingredients is not None else None


def make_food_create(name="Pizza", description="Delicious cheesy pizza", ingredients=None):
    """
    Build a FoodCreate payload.

    Example:
        >>> make_food_create("Burger", ingredients=["Tomato", "Lettuce"])
    """
    return FoodCreate(name=name, description=description, ingredients=_names(ingredients))


def make_food_update(name=None, description=None, ingredients=None):
    return FoodUpdate(name=name, description=description, ingredients=_names(ingredients))


def make_food(
    food_id=1,
    name="Pizza",
    description="Delicious cheesy pizza",
    ingredients=("Tomato", "Cheese"),
):
    """Build a materialized FoodRead with sequential ingredient ids"""
    now = datetime.now(timezone.utc)
    return FoodRead(
        food_id=food_id,
        name=name,
        description=description,
        ingredients=[
            IngredientRead(ingredient_id=i, name=n)
            for i, n in enumerate(ingredients, start=1)
        ],
        created_at=now,
        updated_at=now,
    )
