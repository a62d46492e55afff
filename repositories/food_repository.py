"""
Food Repository - Data access layer for food items stored in SQL
"""

import logging
from typing import List, Optional
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from domain.models import Food
from domain.schemas.food_schemas import FoodCreate, FoodRead, FoodUpdate, IngredientRead
from repositories.base import BaseRepository
from repositories.food_ingredient_repository import FoodIngredientRepository

logger = logging.getLogger("foodcatalog.repositories.food")


class FoodSQLRepository(BaseRepository[FoodRead]):
    """
    Repository for food items and their ingredient attachments.

    Mutating operations run in a single transaction on the given session:
    the food row, the ingredient dictionary upserts and the join rows are
    committed together or rolled back together. Results are re-read after
    commit and returned as detached FoodRead values.
    """

    def __init__(self, db: Session, attachments: Optional[FoodIngredientRepository] = None):
        self.db = db
        self.attachments = attachments or FoodIngredientRepository(db)

    @staticmethod
    def _materialize(food: Food, ingredients: List[IngredientRead]) -> FoodRead:
        return FoodRead(
            food_id=food.food_id,
            name=food.name,
            description=food.description,
            ingredients=ingredients,
            created_at=food.created_at,
            updated_at=food.updated_at,
        )

    def find_all(self) -> List[FoodRead]:
        """Get all foods with their ingredients"""
        foods = list(
            self.db.execute(
                select(Food)
                .order_by(Food.food_id)
                .execution_options(populate_existing=True)
            ).scalars()
        )
        attached = self.attachments.ingredients_for_many(f.food_id for f in foods)
        return [self._materialize(f, attached.get(f.food_id, [])) for f in foods]

    def find_by_id(self, food_id: int) -> Optional[FoodRead]:
        """Get food by ID"""
        food = self.db.execute(
            select(Food)
            .where(Food.food_id == food_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if food is None:
            return None
        return self._materialize(food, self.attachments.ingredients_for(food_id))

    def create(self, data: FoodCreate) -> FoodRead:
        """
        Insert a food and attach its ingredients.

        Ingredients that do not exist yet are created; existing ones are
        reused by name.

        Raises:
            SQLAlchemyError: on any storage failure, after rolling back
        """
        try:
            food = Food(name=data.name, description=data.description)
            self.db.add(food)
            self.db.flush()
            food_id = food.food_id

            names = data.ingredient_names()
            if names:
                self.attachments.reconcile(food_id, names)

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning("Rolled back creation of food %r", data.name)
            raise

        created = self.find_by_id(food_id)
        if created is None:
            raise RuntimeError(f"Food {food_id} vanished right after creation")
        logger.info("Created food %s (%s ingredients)", food_id, len(created.ingredients))
        return created

    def update(self, food_id: int, data: FoodUpdate) -> Optional[FoodRead]:
        """
        Update the provided fields of a food.

        Blank name or description values leave the stored ones untouched.
        When ``data.ingredients`` is given the attachment set is replaced,
        otherwise it is left as is.

        Returns:
            The updated food, or None if no food has this ID
        """
        values = {"updated_at": func.now()}
        if data.name:
            values["name"] = data.name
        if data.description:
            values["description"] = data.description

        try:
            result = self.db.execute(
                update(Food)
                .where(Food.food_id == food_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                logger.info("Food %s not found for update", food_id)
                return None

            names = data.ingredient_names()
            if names is not None:
                self.attachments.reconcile(food_id, names)

            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning("Rolled back update of food %s", food_id)
            raise

        return self.find_by_id(food_id)

    def delete(self, food_id: int) -> bool:
        """Delete a food and its attachments; ingredients themselves are kept"""
        try:
            self.attachments.detach_all(food_id)
            result = self.db.execute(
                delete(Food)
                .where(Food.food_id == food_id)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.warning("Rolled back deletion of food %s", food_id)
            raise

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted food %s", food_id)
        return deleted
