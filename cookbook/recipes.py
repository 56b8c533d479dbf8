import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from . import crud, models
from .models import utcnow
from .sanitize import sanitize

logger = logging.getLogger(__name__)


def load_recipes(path):
    """Load recipes from a JSON file and return a list of dicts.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: list of recipe dictionaries.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_recipes(db: Session, recipes) -> int:
    """Store seed recipes the same way the API would, skipping known names.

    Entries without a name, ingredients or instructions are skipped.
    ``ingredients`` may be a list; it is stored one item per line.
    """
    added = 0
    for r in recipes:
        ingredients = r.get("ingredients")
        if isinstance(ingredients, list):
            ingredients = "\n".join(str(i) for i in ingredients)
        fields = {
            "name": sanitize(r.get("name")),
            "category": sanitize(r.get("category")) or "uncategorized",
            "prep_time": sanitize(r.get("prepTime")),
            "cook_time": sanitize(r.get("cookTime")),
            "ingredients": sanitize(ingredients),
            "instructions": sanitize(r.get("instructions")),
            "notes": sanitize(r.get("notes")),
        }
        if not (fields["name"] and fields["ingredients"] and fields["instructions"]):
            logger.warning("Skipping incomplete recipe %r", r.get("name"))
            continue
        exists = (
            db.query(models.Recipe)
            .filter(models.Recipe.name == fields["name"])
            .first()
        )
        if exists:
            continue
        now = utcnow()
        crud.insert_document(db, "recipes", dict(fields, created_at=now, updated_at=now))
        added += 1
    return added
