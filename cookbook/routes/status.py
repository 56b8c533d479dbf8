import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud
from ..config import get_settings
from ..db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "cookbook"}


@router.get("/api/test")
def store_status(db: Session = Depends(get_db)):
    """Report configuration and whether the recipes table can be read."""
    try:
        settings = get_settings()
        environment = {
            "environment": settings.environment,
            "databaseUrl": make_url(settings.database_url).render_as_string(hide_password=True),
        }

        try:
            found = crud.count_documents(db, "recipes", limit=1)
            database = f"SUCCESS - {found} recipes found"
        except SQLAlchemyError as e:
            logger.error("Store check failed: %s", e)
            database = f"ERROR: {e}"

        return {"status": "OK", "environment": environment, "database": database}
    except Exception as e:
        logger.exception("Status check failed")
        return JSONResponse(status_code=500, content={"status": "ERROR", "error": str(e)})
