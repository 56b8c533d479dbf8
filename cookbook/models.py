import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from .db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="uncategorized")
    prep_time = Column(Text, nullable=False, default="")
    cook_time = Column(Text, nullable=False, default="")
    ingredients = Column(Text, nullable=False)  # one ingredient per line
    instructions = Column(Text, nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), index=True, default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)


class Comment(Base):
    __tablename__ = "comments"
    id = Column(String(36), primary_key=True, default=_uuid)
    # not a ForeignKey: comments outlive a deleted recipe
    recipe_id = Column(String(36), index=True, nullable=False)
    username = Column(String(100), nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), index=True, default=utcnow)
