"""
Tests for the sample-data seed script.

Verifies seeding through RecipeService and CollectionRepository:
- sample recipes get their derived ratio
- collections are linked by favorite, roast level and brewing method
- a database with recipes is left alone
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from repositories import CollectionRepository, RecipeRepository
from scripts.seed_db import (
    EXPERIMENTAL_BREWS,
    LIGHT_ROASTS,
    MORNING_FAVORITES,
    SAMPLE_RECIPES,
    seed_database,
)
from test_fixtures import db_session, sqlite_client

SEED_DAY = date(2024, 1, 20)


def _names_in(db: Session, collection_name: str) -> set:
    collections = CollectionRepository(db)
    recipes = RecipeRepository(db)
    collection = collections.get_by_name(collection_name)
    recipe_ids = collections.get_recipe_ids(collection.collection_id)
    return {recipes.get_by_id(recipe_id).recipe_name for recipe_id in recipe_ids}


def test_seed_creates_recipes_and_collections(db_session: Session):
    """
    Verifies:
    - Every sample recipe is stored with a derived coffee/water ratio
    - Three collections are created and six links made
    """
    counts = seed_database(db_session, today=SEED_DAY)

    assert counts == {"recipes": len(SAMPLE_RECIPES), "collections": 3, "links": 6}
    assert RecipeRepository(db_session).count() == len(SAMPLE_RECIPES)

    rows = RecipeRepository(db_session).read_all(["recipe_id", "origin", "grinder_unit"])
    assert {row["grinder_unit"] for row in rows} == {values["grinder_unit"] for values in SAMPLE_RECIPES}

    kenya_id = next(row["recipe_id"] for row in rows if row["origin"] == "Kenya")
    kenya = RecipeRepository(db_session).get_by_id(kenya_id)
    assert Decimal(str(kenya.coffee_water_ratio)) == Decimal("16.67")


def test_seed_links_collections(db_session: Session):
    seed_database(db_session, today=SEED_DAY)

    assert _names_in(db_session, MORNING_FAVORITES) == {
        "Ethiopian Yirgacheffe - Morning Brew",
        "Guatemalan Antigua - AeroPress",
        "Kenyan AA - Chemex",
    }
    assert _names_in(db_session, LIGHT_ROASTS) == {
        "Ethiopian Yirgacheffe - Morning Brew",
        "Kenyan AA - Chemex",
    }
    assert _names_in(db_session, EXPERIMENTAL_BREWS) == {"Guatemalan Antigua - AeroPress"}


def test_seed_skips_populated_database(db_session: Session):
    """
    Verifies:
    - A second seed run writes nothing and does not hit duplicate collections
    """
    seed_database(db_session, today=SEED_DAY)

    counts = seed_database(db_session, today=SEED_DAY)

    assert counts == {"recipes": 0, "collections": 0, "links": 0}
    assert RecipeRepository(db_session).count() == len(SAMPLE_RECIPES)
