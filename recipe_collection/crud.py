# crud.py
# Contains the functions for Create, Read, Update, Delete (CRUD) operations.

import logging
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
from datetime import datetime, timezone
from passlib.context import CryptContext
from uuid import UUID

from recipe_collection import models
from recipe_collection import schemas
from recipe_collection.filters import Filter, apply_filters, apply_sorting

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Get a logger instance
logger = logging.getLogger(__name__)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


# --- User CRUD Functions ---
def get_user(db: Session, user_id: UUID):
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return (
        db.query(models.User)
        .filter(func.lower(models.User.email) == email.lower())
        .first()
    )


def create_user(db: Session, user: schemas.UserCreate):
    hashed_password = get_password_hash(user.password)
    db_user = models.User(
        email=user.email.lower(),
        hashed_password=hashed_password,
        first_name=user.first_name,
        last_name=user.last_name
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


# --- Recipe CRUD Functions ---
def get_recipe(db: Session, recipe_id: UUID):
    """
    Retrieve a single recipe with its ingredients.
    """
    logger.debug(f"Retrieving recipe with id {recipe_id}")
    return (
        db.query(models.Recipe)
        .options(selectinload(models.Recipe.ingredients))
        .filter(models.Recipe.id == recipe_id)
        .first()
    )


def get_public_recipe(db: Session, recipe_id: UUID):
    """
    Retrieve a recipe only if it has been shared publicly.
    Missing and private recipes both come back as None.
    """
    db_recipe = get_recipe(db, recipe_id)
    if db_recipe is None or not db_recipe.is_public:
        return None
    return db_recipe


def get_recipes(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 100,
    filters_list: Optional[List[Filter]] = None,
    sort_by: Optional[str] = None,
) -> Tuple[List[models.Recipe], int]:
    """
    Retrieve a user's recipes, newest first unless a sort is given.
    Returns the requested page and the number of matching recipes.
    """
    logger.debug(
        f"Retrieving recipes for user {user_id} skipping {skip}, up to limit {limit}, "
        f"filters={filters_list}, sort={sort_by}"
    )
    query = db.query(models.Recipe).filter(models.Recipe.owner_id == user_id)
    if filters_list:
        query = apply_filters(query, filters_list)

    total_count = query.count()

    query = apply_sorting(query, sort_by)
    recipes = (
        query.options(selectinload(models.Recipe.ingredients))
        .offset(skip)
        .limit(limit)
        .all()
    )
    return recipes, total_count


def count_user_recipes(db: Session, user_id: UUID) -> int:
    return db.query(models.Recipe).filter(models.Recipe.owner_id == user_id).count()


def _build_ingredients(ingredients: List[schemas.IngredientCreate]) -> List[models.RecipeIngredient]:
    return [
        models.RecipeIngredient(
            position=position,
            name=item.name,
            amount=item.amount,
            unit=item.unit,
        )
        for position, item in enumerate(ingredients)
    ]


def create_recipe(db: Session, recipe: schemas.RecipeCreate, user_id: UUID):
    """
    Create a new recipe and its ingredient lines.
    """
    logger.debug(f"Creating recipe: {recipe}")
    now = datetime.now(timezone.utc)

    db_recipe = models.Recipe(
        name=recipe.name,
        instructions=recipe.instructions,
        prep_time_minutes=recipe.prep_time_minutes,
        category=recipe.category,
        servings=recipe.servings,
        is_favorite=False,
        is_public=False,
        owner_id=user_id,
        created_at=now,
        updated_at=now,
    )
    db_recipe.ingredients = _build_ingredients(recipe.ingredients)
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def update_recipe(db: Session, recipe_id: UUID, recipe_update: schemas.RecipeUpdate):
    """
    Replace the content of an existing recipe.
    Ingredients are fully replaced; favorite, rating and sharing are kept.
    """
    logger.debug(f"Updating recipe {recipe_id} with: {recipe_update}")
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None

    update_data = recipe_update.model_dump(exclude={"ingredients"})
    for key, value in update_data.items():
        setattr(db_recipe, key, value)
    db_recipe.updated_at = datetime.now(timezone.utc)

    # delete-orphan cascade removes the old lines
    db_recipe.ingredients = _build_ingredients(recipe_update.ingredients)

    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def delete_recipe(db: Session, recipe_id: UUID):
    """
    Delete a recipe from the database.
    The cascade option in the model will handle deleting its ingredients.
    """
    db_recipe = get_recipe(db, recipe_id)
    if db_recipe:
        logger.debug(f"Deleting recipe {recipe_id}")
        db.delete(db_recipe)
        db.commit()
    else:
        logger.debug(f"Recipe {recipe_id} not found - nothing to delete")
    return db_recipe


def toggle_favorite(db: Session, recipe_id: UUID):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    db_recipe.is_favorite = not bool(db_recipe.is_favorite)
    db_recipe.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_recipe)
    logger.debug(f"Recipe {recipe_id} favorite is now {db_recipe.is_favorite}")
    return db_recipe


def set_rating(db: Session, recipe_id: UUID, rating: Optional[int]):
    """
    Set a 1-5 personal rating, or clear it with None.
    """
    if rating is not None and not 1 <= rating <= 5:
        raise ValueError("Rating must be between 1 and 5")
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    db_recipe.rating = rating
    db_recipe.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def set_public(db: Session, recipe_id: UUID, is_public: bool):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    db_recipe.is_public = is_public
    db_recipe.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe
