from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models

# collection name -> ORM model
COLLECTIONS = {
    "recipes": models.Recipe,
    "comments": models.Comment,
}


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None


def get_document(db: Session, collection: str, doc_id: str):
    model = _model(collection)
    return db.query(model).filter(model.id == doc_id).first()


def document_exists(db: Session, collection: str, doc_id: str) -> bool:
    model = _model(collection)
    return db.query(model.id).filter(model.id == doc_id).first() is not None


def query_documents(
    db: Session,
    collection: str,
    where: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
) -> List[Any]:
    """Return documents newest first, optionally filtered by equality."""
    model = _model(collection)
    query = db.query(model)
    if where:
        query = query.filter_by(**where)
    query = query.order_by(model.created_at.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def insert_document(db: Session, collection: str, data: Dict[str, Any]):
    model = _model(collection)
    document = model(**data)
    db.add(document)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(document)
    return document


def delete_document(db: Session, collection: str, doc_id: str) -> bool:
    document = get_document(db, collection, doc_id)
    if not document:
        return False
    db.delete(document)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return True


def count_documents(db: Session, collection: str, limit: Optional[int] = None) -> int:
    model = _model(collection)
    query = db.query(model.id)
    if limit is not None:
        query = query.limit(limit)
    return len(query.all())
