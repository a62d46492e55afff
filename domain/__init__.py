"""
Domain layer - Persistence models and API schemas.
"""

from domain import models, schemas

__all__ = ["models", "schemas"]
