# api/public.py
# Read-only endpoints for recipes their owners have shared. No auth.

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from recipe_collection import crud
from recipe_collection import schemas
from recipe_collection.db.session import get_db
from recipe_collection.presentation import render_printable

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_shared_recipe(db: Session, recipe_id: UUID):
    db_recipe = crud.get_public_recipe(db, recipe_id)
    if db_recipe is None:
        # Private and missing recipes look the same from outside
        logger.info(f"Public recipe {recipe_id} not available")
        raise HTTPException(status_code=404, detail="Recipe not found")
    return db_recipe


@router.get("/recipes/{recipe_id}", response_model=schemas.PublicRecipe)
def read_public_recipe(recipe_id: UUID, db: Session = Depends(get_db)):
    """
    Shared view of a public recipe.
    """
    return _get_shared_recipe(db, recipe_id)


@router.get("/recipes/{recipe_id}/print", response_class=PlainTextResponse)
def print_public_recipe(recipe_id: UUID, db: Session = Depends(get_db)):
    """
    Printable text of a public recipe.
    """
    return render_printable(_get_shared_recipe(db, recipe_id))
