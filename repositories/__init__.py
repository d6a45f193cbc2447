"""
Repositories package - data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository
from repositories.collection_repository import CollectionRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "CollectionRepository",
]
