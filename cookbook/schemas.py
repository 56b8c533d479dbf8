from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RecipePayload(CamelModel):
    """Incoming recipe body.

    Fields are left untyped: the handler sanitizes whatever arrives and
    decides what is missing, so a wrong type is not a schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: Any = Field(None, json_schema_extra={"example": "Grandma's Pie"})
    category: Any = Field(None, json_schema_extra={"example": "desserts"})
    prep_time: Any = Field(None, json_schema_extra={"example": "20 minutes"})
    cook_time: Any = Field(None, json_schema_extra={"example": "1 hour"})
    ingredients: Any = Field(None, json_schema_extra={"example": "flour\nsugar"})
    instructions: Any = Field(
        None,
        json_schema_extra={"example": "Mix and bake for one hour at 350 degrees."},
    )
    notes: Any = None


class CommentPayload(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    recipe_id: Any = None
    username: Any = Field(None, json_schema_extra={"example": "Ann"})
    comment: Any = Field(None, json_schema_extra={"example": "Delicious!"})


def _as_utc(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    # SQLite hands back naive datetimes; they were stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Recipe(CamelModel):
    id: str
    name: str
    category: str = "uncategorized"
    prep_time: str = ""
    cook_time: str = ""
    ingredients: str
    instructions: str
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return _as_utc(value)


class Comment(CamelModel):
    id: str
    recipe_id: str
    username: str
    comment: str
    created_at: Optional[datetime] = None

    @field_serializer("created_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return _as_utc(value)


class RecipeList(CamelModel):
    success: bool = True
    count: int
    recipes: List[Recipe]


class RecipeResponse(CamelModel):
    success: bool = True
    recipe: Recipe


class RecipeCreated(CamelModel):
    success: bool = True
    message: str = "Recipe created successfully"
    recipe: Recipe


class RecipeDeleted(CamelModel):
    success: bool = True
    message: str = "Recipe deleted successfully"
    recipe_id: str


class CommentList(CamelModel):
    success: bool = True
    count: int
    recipe_id: str
    comments: List[Comment]


class CommentCreated(CamelModel):
    success: bool = True
    message: str = "Comment added successfully"
    comment: Comment
