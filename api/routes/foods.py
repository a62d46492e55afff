"""Food item routes"""

from fastapi import APIRouter, Depends, Path, status
from typing import Annotated, List

from api.dependencies import get_food_repository
from api.responses import APIResponse
from domain.schemas.food_schemas import FoodCreate, FoodRead, FoodUpdate
from repositories import BaseRepository
from services.food_service import FoodService

router = APIRouter(prefix="/foods", tags=["Foods"])

FoodId = Annotated[int, Path(ge=1, description="Food identifier")]


@router.get("", response_model=APIResponse[List[FoodRead]])
def get_foods(repo: BaseRepository = Depends(get_food_repository)):
    """List all food items with their ingredients"""
    foods = FoodService.get_all_foods(repo)
    return APIResponse[List[FoodRead]].ok("Foods found", foods)


@router.get("/{food_id}", response_model=APIResponse[FoodRead])
def get_food(food_id: FoodId, repo: BaseRepository = Depends(get_food_repository)):
    """Get a single food item by ID"""
    food = FoodService.get_food(repo, food_id)
    return APIResponse[FoodRead].ok("Food found", food)


@router.post("", response_model=APIResponse[FoodRead], status_code=status.HTTP_201_CREATED)
def create_food(payload: FoodCreate, repo: BaseRepository = Depends(get_food_repository)):
    """
    Create a food item.

    Ingredients are given by name. Names that already exist are attached to
    the existing ingredient; new names create a new ingredient.

    Example:
    - {"name": "Pizza", "description": "Cheesy", "ingredients": [{"name": "Tomato"}]}
    """
    food = FoodService.create_food(repo, payload)
    return APIResponse[FoodRead].ok("Food created", food)


@router.put("/{food_id}", response_model=APIResponse[FoodRead])
def update_food(
    payload: FoodUpdate,
    food_id: FoodId,
    repo: BaseRepository = Depends(get_food_repository),
):
    """
    Update a food item.

    Only the fields present in the body are changed. Sending ``ingredients``
    replaces the whole ingredient list; omitting it keeps the current one.
    """
    food = FoodService.update_food(repo, food_id, payload)
    return APIResponse[FoodRead].ok("Food updated", food)


@router.delete("/{food_id}", response_model=APIResponse)
def delete_food(food_id: FoodId, repo: BaseRepository = Depends(get_food_repository)):
    """Delete a food item; its ingredients stay available to other foods"""
    FoodService.delete_food(repo, food_id)
    return APIResponse.ok("Food deleted")
