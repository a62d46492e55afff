"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.food_schemas import (
    IngredientName,
    FoodCreate,
    FoodUpdate,
    IngredientRead,
    FoodRead,
)

__all__ = [
    # Request schemas
    "IngredientName",
    "FoodCreate",
    "FoodUpdate",
    # Read models
    "IngredientRead",
    "FoodRead",
]
