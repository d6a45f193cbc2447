"""
Recipe service - derived fields applied before a recipe is stored
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from domain.models import Recipe
from domain.schemas import RecipeCreate
from repositories.recipe_repository import RecipeRepository

logger = logging.getLogger("coffeetracker.recipe_service")

MAX_RECIPE_NAME_LENGTH = 200
FALLBACK_RECIPE_NAME = "Unknown Recipe"
_ELLIPSIS = "..."


def derive_coffee_water_ratio(coffee_beans, water) -> Optional[Decimal]:
    """water / coffee_beans rounded to two decimals, or None when either is missing"""
    if not coffee_beans or not water:
        return None
    ratio = Decimal(str(water)) / Decimal(str(coffee_beans))
    return ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def generate_recipe_name(origin: Optional[str], recipe_name: Optional[str] = None, today: date = None) -> str:
    """
    Resolve the stored recipe name.

    A provided name is trimmed and capped at 200 characters (197 + "...").
    A blank name becomes "<origin> - <date>", shortening the origin when the
    result would not fit. Without an origin the fallback name is used.
    """
    if recipe_name and recipe_name.strip():
        name = recipe_name.strip()
        if len(name) > MAX_RECIPE_NAME_LENGTH:
            name = name[: MAX_RECIPE_NAME_LENGTH - len(_ELLIPSIS)] + _ELLIPSIS
        return name

    origin = (origin or "").strip()
    if not origin:
        return FALLBACK_RECIPE_NAME

    suffix = f" - {(today or date.today()).isoformat()}"
    name = f"{origin}{suffix}"
    if len(name) > MAX_RECIPE_NAME_LENGTH:
        keep = MAX_RECIPE_NAME_LENGTH - len(suffix) - len(_ELLIPSIS)
        name = f"{origin[:keep]}{_ELLIPSIS}{suffix}"
    return name


def prepare_recipe_input(payload: RecipeCreate, today: date = None) -> Dict[str, Any]:
    """Column values for a new recipe with the ratio and name filled in"""
    values = payload.model_dump()
    if values.get("evaluation_system") is not None:
        values["evaluation_system"] = values["evaluation_system"].value
    if values.get("coffee_water_ratio") is None:
        values["coffee_water_ratio"] = derive_coffee_water_ratio(values["coffee_beans"], values["water"])
    values["recipe_name"] = generate_recipe_name(values["origin"], values.get("recipe_name"), today=today)
    return values


class RecipeService:
    """Creates recipes with derived fields applied"""

    def __init__(self, repository: RecipeRepository):
        self.repository = repository

    def create_recipe(self, payload: RecipeCreate, today: date = None) -> Recipe:
        recipe = self.repository.create(Recipe(**prepare_recipe_input(payload, today=today)))
        logger.info(f"Created recipe {recipe.recipe_id} ({recipe.recipe_name})")
        return recipe
