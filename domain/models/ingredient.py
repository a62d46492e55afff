"""
Ingredient model - shared ingredient dictionary.
One row per distinct ingredient name, referenced by any number of foods.
"""

from sqlalchemy import Column, Integer, Text, UniqueConstraint

from domain.models.database import Base


class Ingredient(Base):
    """
    Ingredient dictionary table.

    Rows are created lazily the first time a food references a name and are
    never deleted by the food operations, since other foods may still use them.
    """

    __tablename__ = "ingredients"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, index=True)

    __table_args__ = (UniqueConstraint("name", name="uq_ingredient_name"),)

    def __repr__(self):
        return f"<Ingredient(id={self.ingredient_id}, name='{self.name}')>"
