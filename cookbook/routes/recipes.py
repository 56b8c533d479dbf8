"""Recipe endpoints.

- GET    /api/recipes              all recipes, newest first
- GET    /api/recipes?recent=N     the N most recent recipes
- GET    /api/recipes/{recipe_id}  one recipe
- POST   /api/recipes              create a recipe
- DELETE /api/recipes/{recipe_id}  delete a recipe
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..db import get_db
from ..errors import NotFoundError, StoreError, ValidationError
from ..models import utcnow
from ..sanitize import RECIPE_FIELD_MAX, sanitize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

ALLOWED_METHODS = ["GET", "POST", "DELETE"]
REQUIRED_FIELDS = ["name", "ingredients", "instructions"]
# largest LIMIT the store drivers accept
RECENT_MAX = 2**31 - 1


def parse_recent(recent: Optional[str]) -> Optional[int]:
    """Turn the raw ``recent`` query value into a limit, or None if absent.

    Limits past ``RECENT_MAX`` are clamped; no table holds that many rows.
    """
    if recent is None or recent == "":
        return None
    try:
        limit = int(recent)
    except ValueError:
        limit = 0
    if limit < 1:
        raise ValidationError(
            "Invalid recent parameter",
            "recent must be a positive integer",
        )
    return min(limit, RECENT_MAX)


def list_recipes(db: Session, limit: Optional[int] = None) -> schemas.RecipeList:
    try:
        rows = crud.query_documents(db, "recipes", limit=limit)
    except SQLAlchemyError as e:
        logger.exception("Error getting recipes")
        label = "Failed to retrieve recent recipes" if limit else "Failed to retrieve recipes"
        raise StoreError(label, str(e)) from e
    recipes = [schemas.Recipe.model_validate(r) for r in rows]
    return schemas.RecipeList(count=len(recipes), recipes=recipes)


@router.get("", response_model=schemas.RecipeList)
def get_recipes(recent: Optional[str] = None, db: Session = Depends(get_db)):
    return list_recipes(db, parse_recent(recent))


@router.get("/{recipe_id}", response_model=schemas.RecipeList | schemas.RecipeResponse)
def get_recipe(recipe_id: str, recent: Optional[str] = None, db: Session = Depends(get_db)):
    # ?recent wins over the id segment
    limit = parse_recent(recent)
    if limit is not None:
        return list_recipes(db, limit)

    try:
        row = crud.get_document(db, "recipes", recipe_id)
    except SQLAlchemyError as e:
        logger.exception("Error getting recipe %s", recipe_id)
        raise StoreError("Failed to retrieve recipe", str(e)) from e
    if not row:
        logger.warning("Recipe %s not found", recipe_id)
        raise NotFoundError("Recipe not found", recipeId=recipe_id)
    return schemas.RecipeResponse(recipe=schemas.Recipe.model_validate(row))


@router.post("", status_code=201, response_model=schemas.RecipeCreated)
def create_recipe(payload: schemas.RecipePayload, db: Session = Depends(get_db)):
    fields = {
        "name": sanitize(payload.name, RECIPE_FIELD_MAX),
        "category": sanitize(payload.category, RECIPE_FIELD_MAX) or "uncategorized",
        "prep_time": sanitize(payload.prep_time, RECIPE_FIELD_MAX),
        "cook_time": sanitize(payload.cook_time, RECIPE_FIELD_MAX),
        "ingredients": sanitize(payload.ingredients, RECIPE_FIELD_MAX),
        "instructions": sanitize(payload.instructions, RECIPE_FIELD_MAX),
        "notes": sanitize(payload.notes, RECIPE_FIELD_MAX),
    }
    if not all(fields[f] for f in REQUIRED_FIELDS):
        logger.warning("Rejected recipe with missing required fields")
        raise ValidationError("Missing required fields", required=REQUIRED_FIELDS)

    now = utcnow()
    fields["created_at"] = now
    fields["updated_at"] = now
    try:
        row = crud.insert_document(db, "recipes", fields)
    except SQLAlchemyError as e:
        logger.exception("Error creating recipe")
        raise StoreError("Failed to create recipe", str(e)) from e

    logger.info("Created recipe %s (%s)", row.id, row.name)
    return schemas.RecipeCreated(recipe=schemas.Recipe.model_validate(row))


@router.delete("/{recipe_id}", response_model=schemas.RecipeDeleted)
def delete_recipe(recipe_id: str, db: Session = Depends(get_db)):
    try:
        deleted = crud.delete_document(db, "recipes", recipe_id)
    except SQLAlchemyError as e:
        logger.exception("Error deleting recipe %s", recipe_id)
        raise StoreError("Failed to delete recipe", str(e)) from e
    if not deleted:
        logger.warning("Recipe %s not found", recipe_id)
        raise NotFoundError("Recipe not found", recipeId=recipe_id)

    logger.info("Deleted recipe %s", recipe_id)
    return schemas.RecipeDeleted(recipe_id=recipe_id)
