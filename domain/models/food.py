"""
Food models - food items and their ingredient attachments.
"""

from sqlalchemy import (
    Column,
    Integer,
    Text,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.sql import func

from domain.models.database import Base


class Food(Base):
    """Food item owning a set of ingredient attachments"""

    __tablename__ = "foods"

    food_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (CheckConstraint("length(name) > 0", name="ck_food_name_nonempty"),)

    def __repr__(self):
        return f"<Food(id={self.food_id}, name='{self.name}')>"


class FoodIngredient(Base):
    """Join row linking one food to one ingredient (no surrogate key)"""

    __tablename__ = "food_ingredients"

    food_id = Column(
        Integer,
        ForeignKey("foods.food_id", ondelete="CASCADE"),
        primary_key=True,
    )
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredients.ingredient_id"),
        primary_key=True,
        index=True,
    )
