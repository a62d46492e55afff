"""
Ingredient SQL Repository - Data access layer for the ingredient dictionary
"""

import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from domain.models.ingredient import Ingredient

logger = logging.getLogger("foodcatalog.repositories.ingredient")


class IngredientSQLRepository:
    """
    Repository for the ingredient dictionary.

    Never commits: every write runs inside the caller's transaction so that it
    is rolled back together with the food operation that triggered it.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_name(self, name: str) -> Optional[Ingredient]:
        """Get ingredient by exact name"""
        return self.db.execute(
            select(Ingredient).where(Ingredient.name == name)
        ).scalar_one_or_none()

    def resolve(self, name: str) -> int:
        """
        Return the id of the ingredient called ``name``, creating it if needed.

        Handles race conditions with IntegrityError retry: the insert runs in a
        SAVEPOINT, so when a concurrent transaction commits the same name first
        only the savepoint is rolled back and the winner's row is re-fetched.

        Args:
            name: Ingredient name (matched exactly)

        Returns:
            ingredient_id of the existing or newly created row
        """
        ingredient = self.get_by_name(name)
        if ingredient is not None:
            return ingredient.ingredient_id

        ingredient = Ingredient(name=name)
        try:
            with self.db.begin_nested():
                self.db.add(ingredient)
        except IntegrityError:
            # Race condition - another transaction created it
            logger.info("Ingredient %r created concurrently, re-fetching", name)
            existing = self.get_by_name(name)
            if existing is None:
                raise
            return existing.ingredient_id

        logger.debug("Created ingredient %r with id %s", name, ingredient.ingredient_id)
        return ingredient.ingredient_id
