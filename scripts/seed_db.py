#!/usr/bin/env python3
"""
Load sample recipes and collections into an empty database.

The sample data deliberately mixes canonical and legacy values
("Pulped Natural", "Medium-Fine", "AeroPress with metal filter", a 22°C cold
brew) so the migration scripts have something to analyze after seeding.
Nothing is written when the recipes table already has rows.
"""

import sys
import logging
from datetime import date
from pathlib import Path
from typing import Dict

from sqlalchemy.orm import Session

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters.postgres_client import PostgresClient
from app.config import settings
from app.exceptions import ConfigurationError
from domain.models.database import init_database
from domain.schemas import RecipeCreate
from repositories import CollectionRepository, RecipeRepository
from services.recipe_service import RecipeService

logger = logging.getLogger("coffeetracker.seed")

MORNING_FAVORITES = "Morning Favorites"
LIGHT_ROASTS = "Light Roasts"
EXPERIMENTAL_BREWS = "Experimental Brews"

SAMPLE_COLLECTIONS = [
    (MORNING_FAVORITES, "My go-to recipes for starting the day"),
    (LIGHT_ROASTS, "Collection of bright, acidic light roast recipes"),
    (EXPERIMENTAL_BREWS, "Testing new techniques and parameters"),
]

SAMPLE_RECIPES = [
    dict(
        recipe_name="Ethiopian Yirgacheffe - Morning Brew",
        is_favorite=True,
        origin="Ethiopia",
        processing_method="Washed",
        altitude=1800,
        roasting_level="light",
        water_temperature=93,
        brewing_method="pour-over",
        grinder_model="Baratza Encore",
        grinder_unit="Medium-Fine",
        filtering_tools="Hario V60",
        coffee_beans=22,
        water=350,
        tds="1.35",
        extraction_yield="20.5",
        overall_impression=9,
        tasting_notes="Bright floral notes with hints of lemon and tea-like finish.",
    ),
    dict(
        recipe_name="Colombian Huila - French Press",
        origin="Colombia",
        processing_method="Natural",
        altitude=1650,
        roasting_level="medium",
        water_temperature=96,
        brewing_method="french-press",
        grinder_model="Comandante C40",
        grinder_unit="Coarse",
        filtering_tools="French Press",
        coffee_beans=30,
        water=500,
        overall_impression=7,
        tasting_notes="Rich and full-bodied with chocolate and caramel notes.",
    ),
    dict(
        recipe_name="Guatemalan Antigua - AeroPress",
        is_favorite=True,
        origin="Guatemala",
        processing_method="Washed",
        roasting_level="medium",
        water_temperature=85,
        brewing_method="aeropress",
        grinder_model="Timemore C2",
        grinder_unit="Medium",
        filtering_tools="AeroPress with metal filter",
        coffee_beans=18,
        water=270,
        tasting_notes="Smooth and balanced with notes of dark chocolate and orange peel.",
    ),
    dict(
        recipe_name="Brazilian Santos - Cold Brew",
        origin="Brazil",
        processing_method="Pulped Natural",
        roasting_level="dark",
        water_temperature=22,
        brewing_method="cold-brew",
        grinder_model="Baratza Encore",
        grinder_unit="Extra Coarse",
        filtering_tools="Cold brew maker",
        coffee_beans=100,
        water=800,
        tasting_notes="Low acidity, full body with nutty and chocolate notes.",
    ),
    dict(
        recipe_name="Kenyan AA - Chemex",
        is_favorite=True,
        origin="Kenya",
        processing_method="Washed",
        roasting_level="light",
        water_temperature=94,
        brewing_method="pour-over",
        grinder_model="Baratza Virtuoso+",
        grinder_unit="Medium-Coarse",
        filtering_tools="Chemex with bonded filters",
        coffee_beans=42,
        water=700,
        tasting_notes="Bright blackcurrant acidity with wine-like complexity.",
    ),
]


def seed_database(db: Session, today: date = None) -> Dict[str, int]:
    """
    Create the sample collections and recipes and link them.

    Favorites go to Morning Favorites, light roasts to Light Roasts and
    AeroPress brews to Experimental Brews.

    Returns:
        Counts of created recipes, collections and links (all zero when skipped)
    """
    recipes = RecipeRepository(db)
    if recipes.count() > 0:
        logger.info("Database already contains recipes, skipping seed")
        return {"recipes": 0, "collections": 0, "links": 0}

    collection_repo = CollectionRepository(db)
    collections = {}
    for name, description in SAMPLE_COLLECTIONS:
        collections[name] = collection_repo.create_collection(name, description)
        logger.info(f"✓ Created collection: {name}")

    service = RecipeService(recipes)
    links = 0
    for values in SAMPLE_RECIPES:
        recipe = service.create_recipe(RecipeCreate(**values), today=today)

        targets = []
        if recipe.is_favorite:
            targets.append(MORNING_FAVORITES)
        if recipe.roasting_level == "light":
            targets.append(LIGHT_ROASTS)
        if recipe.brewing_method == "aeropress":
            targets.append(EXPERIMENTAL_BREWS)
        for name in targets:
            collection_repo.assign_recipe(collections[name].collection_id, recipe.recipe_id)
            links += 1

    logger.info(
        f"✓ Seeded {len(SAMPLE_RECIPES)} recipes, {len(collections)} collections, {links} links"
    )
    return {"recipes": len(SAMPLE_RECIPES), "collections": len(collections), "links": links}


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
    try:
        client = PostgresClient.from_settings(settings)
    except ConfigurationError as e:
        logger.error(f"✗ {e}")
        return 1

    db = None
    try:
        init_database(client.engine)
        db = client.session()
        seed_database(db)
    finally:
        if db is not None:
            db.close()
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
