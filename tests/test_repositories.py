"""
Tests for the repository classes.

Runs against an in-memory SQLite database (via test_fixtures) so that:
- RecipeRepository field reads, distinct values, updates and counts execute real SQL
- Column whitelisting is enforced
- CollectionRepository name uniqueness is case-insensitive
- Recipe/collection assignments round-trip
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Recipe
from repositories import CollectionRepository, RecipeRepository
from test_fixtures import BASE_TIME, db_session, make_recipe, sqlite_client


def _add_recipes(db_session: Session, *origins):
    recipes = [
        make_recipe(origin=origin, date_created=BASE_TIME + timedelta(minutes=i))
        for i, origin in enumerate(origins)
    ]
    db_session.add_all(recipes)
    db_session.commit()
    return recipes


# =============================================================================
# RECIPE REPOSITORY TESTS
# =============================================================================


def test_recipe_repository_read_all_ordered(db_session: Session):
    """
    Verifies:
    - read_all() returns dicts keyed by the requested fields
    - Rows come back oldest first
    """
    recipes = _add_recipes(db_session, "Kenyan", "Brazilian")
    repo = RecipeRepository(db_session)

    rows = repo.read_all(["recipe_id", "origin"])

    assert [row["origin"] for row in rows] == ["Kenyan", "Brazilian"]
    assert rows[0]["recipe_id"] == recipes[0].recipe_id
    assert set(rows[0]) == {"recipe_id", "origin"}


def test_recipe_repository_read_distinct(db_session: Session):
    _add_recipes(db_session, "Kenyan", "Brazilian", "Kenyan")
    repo = RecipeRepository(db_session)
    assert repo.read_distinct("origin") == ["Brazilian", "Kenyan"]


def test_recipe_repository_update_field(db_session: Session):
    """
    Verifies:
    - update_field() changes one column of one recipe
    - date_modified is refreshed
    - Other recipes are untouched
    """
    first, second = _add_recipes(db_session, "Brazilian", "Kenyan")
    repo = RecipeRepository(db_session)

    updated = repo.update_field(first.recipe_id, "origin", "Brazil")

    assert updated == 1
    db_session.expire_all()
    assert repo.get_by_id(first.recipe_id).origin == "Brazil"
    assert repo.get_by_id(first.recipe_id).date_modified.replace(tzinfo=None) > BASE_TIME.replace(tzinfo=None)
    assert repo.get_by_id(second.recipe_id).origin == "Kenyan"


def test_recipe_repository_update_missing_recipe(db_session: Session):
    repo = RecipeRepository(db_session)
    assert repo.update_field(uuid.uuid4(), "origin", "Brazil") == 0


def test_recipe_repository_update_failure_rolls_back(db_session: Session):
    """
    Verifies:
    - A constraint violation propagates to the caller
    - The session is usable afterwards
    """
    recipe = _add_recipes(db_session, "Brazilian")[0]
    repo = RecipeRepository(db_session)

    with pytest.raises(Exception):
        repo.update_field(recipe.recipe_id, "origin", None)

    assert repo.count() == 1


def test_recipe_repository_rejects_unlisted_columns(db_session: Session):
    """
    Verifies:
    - Field helpers refuse columns outside the migration whitelist
    """
    repo = RecipeRepository(db_session)
    with pytest.raises(ServiceValidationError):
        repo.read_all(["recipe_id", "tasting_notes"])
    with pytest.raises(ServiceValidationError):
        repo.update_field(uuid.uuid4(), "recipe_id", uuid.uuid4())
    with pytest.raises(ServiceValidationError):
        repo.read_distinct("origin; DROP TABLE recipes")


def test_recipe_repository_count(db_session: Session):
    _add_recipes(db_session, "Brazil", "Kenya")
    db_session.add(make_recipe(filtering_tools=None, date_created=BASE_TIME + timedelta(hours=1)))
    db_session.commit()
    repo = RecipeRepository(db_session)

    assert repo.count() == 3
    assert repo.count("filtering_tools") == 2


def test_recipe_repository_create_and_get(db_session: Session):
    repo = RecipeRepository(db_session)
    recipe = repo.create(make_recipe(water=Decimal("300")))

    assert isinstance(recipe.recipe_id, uuid.UUID)
    assert repo.exists(recipe.recipe_id)
    assert repo.get_by_id(uuid.uuid4()) is None
    assert isinstance(repo.get_by_id(recipe.recipe_id), Recipe)


def test_evaluation_system_constraint_enforced(db_session: Session):
    """
    Verifies:
    - The ORM table carries the configured evaluation_system allow-list
    """
    repo = RecipeRepository(db_session)
    repo.create(make_recipe(evaluation_system="quick-tasting"))
    with pytest.raises(Exception):
        repo.create(make_recipe(evaluation_system="star-rating"))


# =============================================================================
# COLLECTION REPOSITORY TESTS
# =============================================================================


def test_collection_create_and_lookup_case_insensitive(db_session: Session):
    """
    Verifies:
    - Names are trimmed before storage
    - get_by_name() and name_exists() ignore case
    - Defaults are applied
    """
    repo = CollectionRepository(db_session)
    collection = repo.create_collection("  Morning Brews ", tags=["v60"])

    assert collection.name == "Morning Brews"
    assert collection.color == "blue"
    assert collection.tags == ["v60"]
    assert repo.get_by_name("MORNING brews").collection_id == collection.collection_id
    assert repo.name_exists("morning brews")
    assert not repo.name_exists("morning brews", exclude_id=collection.collection_id)
    assert repo.get_by_name("Evening") is None


def test_collection_duplicate_name_conflicts(db_session: Session):
    repo = CollectionRepository(db_session)
    repo.create_collection("Favorites")
    with pytest.raises(ConflictError):
        repo.create_collection("FAVORITES")
    with pytest.raises(ServiceValidationError):
        repo.create_collection("   ")


def test_collection_assign_recipe(db_session: Session):
    """
    Verifies:
    - assign_recipe() links a recipe once, repeated calls are no-ops
    - get_recipe_ids() lists assigned recipes
    - Unknown collection or recipe raises NotFoundError
    """
    first, second = _add_recipes(db_session, "Brazil", "Kenya")
    repo = CollectionRepository(db_session)
    collection = repo.create_collection("Competition")

    repo.assign_recipe(collection.collection_id, first.recipe_id)
    repo.assign_recipe(collection.collection_id, first.recipe_id)
    repo.assign_recipe(collection.collection_id, second.recipe_id)

    assert sorted(repo.get_recipe_ids(collection.collection_id)) == sorted(
        [first.recipe_id, second.recipe_id]
    )
    with pytest.raises(NotFoundError):
        repo.assign_recipe(uuid.uuid4(), first.recipe_id)
    with pytest.raises(NotFoundError):
        repo.assign_recipe(collection.collection_id, uuid.uuid4())
