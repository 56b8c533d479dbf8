"""Comment endpoints.

- GET  /api/comments?recipeId=ID  comments on a recipe, newest first
- POST /api/comments              add a comment to an existing recipe
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..db import get_db
from ..errors import NotFoundError, StoreError, ValidationError
from ..models import utcnow
from ..sanitize import COMMENT_FIELD_MAX, RECIPE_FIELD_MAX, sanitize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comments", tags=["comments"])

ALLOWED_METHODS = ["GET", "POST"]
REQUIRED_FIELDS = ["recipeId", "username", "comment"]
USERNAME_MAX = 100


@router.get("", response_model=schemas.CommentList)
def get_comments(
    recipe_id: Optional[str] = Query(None, alias="recipeId"),
    db: Session = Depends(get_db),
):
    if not recipe_id:
        raise ValidationError("Missing recipeId parameter")
    try:
        rows = crud.query_documents(db, "comments", where={"recipe_id": recipe_id})
    except SQLAlchemyError as e:
        logger.exception("Error getting comments for recipe %s", recipe_id)
        raise StoreError("Failed to retrieve comments", str(e)) from e
    comments = [schemas.Comment.model_validate(c) for c in rows]
    return schemas.CommentList(count=len(comments), recipe_id=recipe_id, comments=comments)


@router.post("", status_code=201, response_model=schemas.CommentCreated)
def create_comment(payload: schemas.CommentPayload, db: Session = Depends(get_db)):
    # Order matters: presence, then recipe existence, then lengths.
    # An empty string counts as present and fails the length check instead.
    if payload.recipe_id is None or payload.username is None or payload.comment is None:
        raise ValidationError("Missing required fields", required=REQUIRED_FIELDS)

    recipe_id = sanitize(payload.recipe_id, COMMENT_FIELD_MAX)
    try:
        exists = bool(recipe_id) and crud.document_exists(db, "recipes", recipe_id)
    except SQLAlchemyError as e:
        logger.exception("Error checking recipe %s", recipe_id)
        raise StoreError("Failed to add comment", str(e)) from e
    if not exists:
        logger.warning("Comment for unknown recipe %r", payload.recipe_id)
        raise NotFoundError("Recipe not found", recipeId=recipe_id)

    # Over-long text is rejected below, never silently cut to fit.
    username = sanitize(payload.username, RECIPE_FIELD_MAX)
    comment = sanitize(payload.comment, RECIPE_FIELD_MAX)
    if not 1 <= len(username) <= USERNAME_MAX:
        raise ValidationError(
            "Invalid username",
            f"username must be 1-{USERNAME_MAX} characters",
        )
    if not 1 <= len(comment) <= COMMENT_FIELD_MAX:
        raise ValidationError(
            "Invalid comment",
            f"comment must be 1-{COMMENT_FIELD_MAX} characters",
        )

    # The recipe may be deleted between the check above and this insert.
    try:
        row = crud.insert_document(
            db,
            "comments",
            {
                "recipe_id": recipe_id,
                "username": username,
                "comment": comment,
                "created_at": utcnow(),
            },
        )
    except SQLAlchemyError as e:
        logger.exception("Error adding comment to recipe %s", recipe_id)
        raise StoreError("Failed to add comment", str(e)) from e

    logger.info("Added comment %s to recipe %s", row.id, recipe_id)
    return schemas.CommentCreated(comment=schemas.Comment.model_validate(row))
