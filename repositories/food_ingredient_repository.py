"""
Food-ingredient attachment repository - maintains the food_ingredients join table
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence
from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from domain.models import FoodIngredient, Ingredient
from domain.schemas.food_schemas import IngredientRead
from repositories.ingredient_sql_repository import IngredientSQLRepository

logger = logging.getLogger("foodcatalog.repositories.food_ingredient")


class FoodIngredientRepository:
    """Reads and replaces the ingredient attachments of foods"""

    def __init__(self, db: Session, ingredient_repo: Optional[IngredientSQLRepository] = None):
        self.db = db
        self.ingredient_repo = ingredient_repo or IngredientSQLRepository(db)

    def ingredients_for(self, food_id: int) -> List[IngredientRead]:
        """Get the ingredients attached to one food"""
        return self.ingredients_for_many([food_id]).get(food_id, [])

    def ingredients_for_many(self, food_ids: Iterable[int]) -> Dict[int, List[IngredientRead]]:
        """Get the ingredients attached to each of the given foods in a single query"""
        food_ids = list(food_ids)
        if not food_ids:
            return {}

        rows = self.db.execute(
            select(FoodIngredient.food_id, Ingredient.ingredient_id, Ingredient.name)
            .join(Ingredient, Ingredient.ingredient_id == FoodIngredient.ingredient_id)
            .where(FoodIngredient.food_id.in_(food_ids))
            .order_by(FoodIngredient.food_id, Ingredient.ingredient_id)
        ).all()

        attached: Dict[int, List[IngredientRead]] = defaultdict(list)
        for food_id, ingredient_id, name in rows:
            attached[food_id].append(IngredientRead(ingredient_id=ingredient_id, name=name))
        return attached

    def detach_all(self, food_id: int) -> int:
        """Remove every attachment of a food; returns the number of rows removed"""
        result = self.db.execute(
            delete(FoodIngredient).where(FoodIngredient.food_id == food_id)
        )
        return result.rowcount

    def reconcile(self, food_id: int, names: Sequence[str]) -> None:
        """
        Replace the attachment set of a food with the ingredients named in ``names``.

        Existing attachments are deleted and the new set is inserted, resolving
        each name through the ingredient dictionary. Duplicate names collapse to
        a single attachment. Must be called inside the transaction of the food
        write; nothing is committed here.
        """
        removed = self.detach_all(food_id)

        ingredient_ids: List[int] = []
        for name in dict.fromkeys(names):
            ingredient_id = self.ingredient_repo.resolve(name)
            if ingredient_id not in ingredient_ids:
                ingredient_ids.append(ingredient_id)

        if ingredient_ids:
            self.db.execute(
                insert(FoodIngredient),
                [{"food_id": food_id, "ingredient_id": iid} for iid in ingredient_ids],
            )

        logger.debug(
            "Reconciled food %s: removed %s attachments, attached %s",
            food_id,
            removed,
            len(ingredient_ids),
        )
