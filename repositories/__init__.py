"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.ingredient_sql_repository import IngredientSQLRepository
from repositories.food_ingredient_repository import FoodIngredientRepository
from repositories.food_repository import FoodSQLRepository
from repositories.food_memory_repository import InMemoryFoodRepository

__all__ = [
    "BaseRepository",
    "IngredientSQLRepository",
    "FoodIngredientRepository",
    "FoodSQLRepository",
    "InMemoryFoodRepository",
]
