"""
Collection Repository - Data access layer for recipe collections
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Collection, Recipe, RecipeCollection
from repositories.base import BaseRepository


class CollectionRepository(BaseRepository[Collection]):
    """Repository for collection data access"""

    def __init__(self, db: Session):
        super().__init__(db, Collection)

    def get_by_id(self, collection_id: UUID) -> Optional[Collection]:
        """Get collection by ID"""
        return (
            self.db.query(Collection)
            .filter(Collection.collection_id == collection_id)
            .first()
        )

    def get_by_name(self, name: str) -> Optional[Collection]:
        """Get collection by name, ignoring case and surrounding whitespace"""
        return (
            self.db.query(Collection)
            .filter(func.lower(Collection.name) == name.strip().lower())
            .first()
        )

    def name_exists(self, name: str, exclude_id: UUID = None) -> bool:
        """Check whether another collection already uses this name"""
        query = self.db.query(Collection).filter(
            func.lower(Collection.name) == name.strip().lower()
        )
        if exclude_id is not None:
            query = query.filter(Collection.collection_id != exclude_id)
        return query.first() is not None

    def create_collection(
        self,
        name: str,
        description: str = None,
        color: str = "blue",
        is_private: bool = False,
        tags: List[str] = None,
    ) -> Collection:
        """Create a new collection with a trimmed, case-insensitively unique name"""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ServiceValidationError("Collection name is required")
        if self.name_exists(cleaned):
            raise ConflictError(
                f"Collection '{cleaned}' already exists", code="DUPLICATE_COLLECTION"
            )

        collection = Collection(
            name=cleaned,
            description=description,
            color=color or "blue",
            is_private=is_private,
            tags=list(tags or []),
        )
        try:
            self.db.add(collection)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                f"Collection '{cleaned}' already exists", code="DUPLICATE_COLLECTION"
            )
        self.db.refresh(collection)
        return collection

    def assign_recipe(self, collection_id: UUID, recipe_id: UUID) -> RecipeCollection:
        """Add a recipe to a collection; assigning twice returns the existing link"""
        if self.get_by_id(collection_id) is None:
            raise NotFoundError(f"Collection {collection_id} not found")
        if self.db.query(Recipe).filter(Recipe.recipe_id == recipe_id).first() is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        link = (
            self.db.query(RecipeCollection)
            .filter(
                RecipeCollection.collection_id == collection_id,
                RecipeCollection.recipe_id == recipe_id,
            )
            .first()
        )
        if link:
            return link

        link = RecipeCollection(collection_id=collection_id, recipe_id=recipe_id)
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        return link

    def get_recipe_ids(self, collection_id: UUID) -> List[UUID]:
        """IDs of recipes in a collection, oldest assignment first"""
        rows = (
            self.db.query(RecipeCollection.recipe_id)
            .filter(RecipeCollection.collection_id == collection_id)
            .order_by(RecipeCollection.date_assigned)
            .all()
        )
        return [row[0] for row in rows]
