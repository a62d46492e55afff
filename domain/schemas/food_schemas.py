"""Pydantic schemas for food items and their ingredients."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime


class IngredientName(BaseModel):
    """Ingredient reference in a request body; resolved by name."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Tomato"])

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class FoodCreate(BaseModel):
    """Body of POST /foods."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Pizza"])
    description: Optional[str] = Field(None, examples=["Delicious cheesy pizza"])
    ingredients: Optional[List[IngredientName]] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    def ingredient_names(self) -> List[str]:
        return [i.name for i in self.ingredients or []]


class FoodUpdate(BaseModel):
    """
    Body of PUT /foods/{food_id}.

    Every field is optional. Blank name/description values are ignored rather
    than stored. ``ingredients`` replaces the attachment set whenever it is
    present, an empty list included.
    """

    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    ingredients: Optional[List[IngredientName]] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    def ingredient_names(self) -> Optional[List[str]]:
        if self.ingredients is None:
            return None
        return [i.name for i in self.ingredients]


class IngredientRead(BaseModel):
    ingredient_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class FoodRead(BaseModel):
    """Fully materialized food item, ingredients included."""

    food_id: int
    name: str
    description: Optional[str] = None
    ingredients: List[IngredientRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def ingredient_names(self) -> set:
        return {i.name for i in self.ingredients}
