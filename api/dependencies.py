"""
API dependencies for dependency injection
"""

from typing import Generator
from fastapi import Request

from app.config import settings, RepositoryBackend
from domain.models import SessionLocal
from domain.schemas.food_schemas import FoodRead
from repositories import BaseRepository, FoodSQLRepository


def get_food_repository(request: Request) -> Generator[BaseRepository[FoodRead], None, None]:
    """
    Food repository dependency for FastAPI routes.

    The SQL backend gets a fresh session per request, closed once the
    response is sent. The memory backend shares the instance stored on
    ``app.state.food_repository`` at startup.

    Usage:
        @router.get("/example")
        def example(repo: BaseRepository = Depends(get_food_repository)):
            ...
    """
    if settings.repository_backend == RepositoryBackend.MEMORY:
        yield request.app.state.food_repository
        return

    db = SessionLocal()
    try:
        yield FoodSQLRepository(db)
    finally:
        db.close()
