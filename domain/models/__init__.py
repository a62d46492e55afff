"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    create_db_engine,
    init_database,
)
from domain.models.ingredient import Ingredient
from domain.models.food import Food, FoodIngredient

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "create_db_engine",
    "init_database",
    # Models
    "Ingredient",
    "Food",
    "FoodIngredient",
]
