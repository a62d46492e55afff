"""
In-memory Food Repository - process-local storage for development and tests
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from domain.schemas.food_schemas import FoodCreate, FoodRead, FoodUpdate, IngredientRead
from repositories.base import BaseRepository

logger = logging.getLogger("foodcatalog.repositories.food_memory")


@dataclass
class _FoodRow:
    food_id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    ingredient_ids: List[int] = field(default_factory=list)


class InMemoryFoodRepository(BaseRepository[FoodRead]):
    """
    Food repository backed by dictionaries.

    Same contract as the SQL repository. A single lock serializes writers, and
    every mutation is computed in full before it is stored, so readers never
    observe a food without its final attachment set.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._foods: Dict[int, _FoodRow] = {}
        self._ingredients: Dict[str, int] = {}
        self._food_ids = itertools.count(1)
        self._ingredient_ids = itertools.count(1)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _resolve(self, name: str) -> int:
        ingredient_id = self._ingredients.get(name)
        if ingredient_id is None:
            ingredient_id = next(self._ingredient_ids)
            self._ingredients[name] = ingredient_id
        return ingredient_id

    def _attach(self, names: Sequence[str]) -> List[int]:
        ingredient_ids: List[int] = []
        for name in dict.fromkeys(names):
            ingredient_id = self._resolve(name)
            if ingredient_id not in ingredient_ids:
                ingredient_ids.append(ingredient_id)
        return ingredient_ids

    def _materialize(self, row: _FoodRow) -> FoodRead:
        names_by_id = {iid: name for name, iid in self._ingredients.items()}
        return FoodRead(
            food_id=row.food_id,
            name=row.name,
            description=row.description,
            ingredients=[
                IngredientRead(ingredient_id=iid, name=names_by_id[iid])
                for iid in sorted(row.ingredient_ids)
            ],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def find_all(self) -> List[FoodRead]:
        with self._lock:
            return [self._materialize(self._foods[k]) for k in sorted(self._foods)]

    def find_by_id(self, food_id: int) -> Optional[FoodRead]:
        with self._lock:
            row = self._foods.get(food_id)
            return self._materialize(row) if row is not None else None

    def create(self, data: FoodCreate) -> FoodRead:
        with self._lock:
            now = self._now()
            row = _FoodRow(
                food_id=next(self._food_ids),
                name=data.name,
                description=data.description,
                created_at=now,
                updated_at=now,
                ingredient_ids=self._attach(data.ingredient_names()),
            )
            self._foods[row.food_id] = row
            logger.info("Created food %s in memory", row.food_id)
            return self._materialize(row)

    def update(self, food_id: int, data: FoodUpdate) -> Optional[FoodRead]:
        with self._lock:
            row = self._foods.get(food_id)
            if row is None:
                return None

            names = data.ingredient_names()
            ingredient_ids = self._attach(names) if names is not None else row.ingredient_ids
            row.name = data.name or row.name
            row.description = data.description or row.description
            row.ingredient_ids = ingredient_ids
            row.updated_at = self._now()
            return self._materialize(row)

    def delete(self, food_id: int) -> bool:
        with self._lock:
            return self._foods.pop(food_id, None) is not None

    def ingredient_count(self) -> int:
        """Number of distinct ingredients ever referenced"""
        with self._lock:
            return len(self._ingredients)
