"""
App package - Application configuration and core utilities.
Contains settings and the exceptions raised by the service layer.
"""

from app.config import settings
from app.exceptions import (
    FoodCatalogError,
    ServiceValidationError,
    NotFoundError,
)

__all__ = [
    "settings",
    "FoodCatalogError",
    "ServiceValidationError",
    "NotFoundError",
]
