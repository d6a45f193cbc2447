"""
Collection models - named recipe groupings and their many-to-many link.
"""

import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    TIMESTAMP,
    Boolean,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base, JSONList


class Collection(Base):
    """
    User-defined recipe collection.

    Name uniqueness is case-insensitive, enforced by CollectionRepository;
    the database only enforces exact-match uniqueness.
    """

    __tablename__ = "collections"

    collection_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    color = Column(String(20), nullable=False, default="blue", server_default="blue")
    is_private = Column(Boolean, default=False)
    is_default = Column(Boolean, default=False)
    tags = Column(JSONList, default=list)
    date_created = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    date_modified = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    recipe_links = relationship(
        "RecipeCollection", back_populates="collection", cascade="all, delete-orphan", passive_deletes=True
    )


class RecipeCollection(Base):
    """Recipe <-> collection assignment; removed with either parent"""

    __tablename__ = "recipe_collections"

    recipe_id = Column(
        Uuid, ForeignKey("recipes.recipe_id", ondelete="CASCADE"), primary_key=True
    )
    collection_id = Column(
        Uuid, ForeignKey("collections.collection_id", ondelete="CASCADE"), primary_key=True
    )
    date_assigned = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    recipe = relationship("Recipe", back_populates="collection_links")
    collection = relationship("Collection", back_populates="recipe_links")
