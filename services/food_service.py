"""Food service - business rules on top of the food repository."""

from typing import List
import logging

from domain.schemas.food_schemas import FoodCreate, FoodRead, FoodUpdate
from repositories.base import BaseRepository
from app.exceptions import ServiceValidationError, NotFoundError

logger = logging.getLogger("foodcatalog.food")


class FoodService:
    """
    Business logic for food items.

    Every method takes the repository to work with, so the storage backend is
    decided by whoever builds the repository (see api.dependencies).
    Absent results are turned into NotFoundError here; storage errors are
    logged and re-raised unchanged.
    """

    @staticmethod
    def get_all_foods(repo: BaseRepository[FoodRead]) -> List[FoodRead]:
        """Return all foods, raising NotFoundError when there are none."""
        try:
            foods = repo.find_all()
        except Exception:
            logger.exception("Error finding all foods")
            raise

        if not foods:
            raise NotFoundError("No foods found")
        logger.info(f"foods_listed count={len(foods)}")
        return foods

    @staticmethod
    def get_food(repo: BaseRepository[FoodRead], food_id: int) -> FoodRead:
        try:
            food = repo.find_by_id(food_id)
        except Exception:
            logger.exception("Error finding food with id %s", food_id)
            raise

        if food is None:
            logger.warning(f"food_not_found food_id={food_id}")
            raise NotFoundError(f"Food {food_id} not found")
        return food

    @staticmethod
    def create_food(repo: BaseRepository[FoodRead], data: FoodCreate) -> FoodRead:
        """
        Create a food with its ingredients.

        Ingredient names are resolved against the shared dictionary, so a name
        used by another food is attached to the same ingredient row.

        Raises:
            ServiceValidationError: If the food name is blank
        """
        if not data.name or not data.name.strip():
            raise ServiceValidationError("Food name is required")

        try:
            food = repo.create(data)
        except Exception:
            logger.exception("Error creating food %r", data.name)
            raise

        logger.info(f"food_created food_id={food.food_id}")
        return food

    @staticmethod
    def update_food(
        repo: BaseRepository[FoodRead], food_id: int, data: FoodUpdate
    ) -> FoodRead:
        """
        Partially update a food.

        Raises:
            NotFoundError: If the food does not exist
        """
        try:
            food = repo.update(food_id, data)
        except Exception:
            logger.exception("Error updating food with id %s", food_id)
            raise

        if food is None:
            raise NotFoundError(f"Food {food_id} not found")
        logger.info(f"food_updated food_id={food_id}")
        return food

    @staticmethod
    def delete_food(repo: BaseRepository[FoodRead], food_id: int) -> None:
        try:
            deleted = repo.delete(food_id)
        except Exception:
            logger.exception("Error deleting food with id %s", food_id)
            raise

        if not deleted:
            raise NotFoundError(f"Food {food_id} not found")
        logger.info(f"food_deleted food_id={food_id}")
