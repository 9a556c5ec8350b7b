# api/recipes.py
# Handles all API endpoints related to a user's own recipes.

import logging
from uuid import UUID
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

# Import local modules
from recipe_collection import crud
from recipe_collection import schemas
from recipe_collection import models
from recipe_collection.db.session import get_db
from recipe_collection.api.auth import get_current_active_user
from recipe_collection.filters import parse_filters
from recipe_collection.presentation import render_printable, share_url
from recipe_collection.scaling import ScalingError, resolve_factor, scale_ingredients
from recipe_collection.units import UnitSystem, convert_ingredients

# Create an API router
router = APIRouter()

# Get a logger instance
logger = logging.getLogger(__name__)


def get_owned_recipe(db: Session, recipe_id: UUID, current_user: models.User, action: str = "view"):
    """
    Load a recipe belonging to the current user.
    Someone else's recipe is a 404 when viewing and a 403 when changing it.
    """
    db_recipe = crud.get_recipe(db, recipe_id=recipe_id)
    if db_recipe is None:
        logger.warning(f"Recipe with ID {recipe_id} not found.")
        raise HTTPException(status_code=404, detail="Recipe not found")
    if db_recipe.owner_id != current_user.id:
        if action == "view":
            logger.warning(f"User {current_user.email} asked for recipe {recipe_id} they don't own")
            raise HTTPException(status_code=404, detail="Recipe not found")
        logger.error(f"User {current_user.email} is not authorized to {action} recipe with ID: {recipe_id}")
        raise HTTPException(status_code=403, detail=f"Not authorized to {action} this recipe")
    return db_recipe


def build_scaled_view(
    db_recipe: models.Recipe,
    servings: Optional[int],
    factor: Optional[float],
    units: Optional[UnitSystem] = None,
) -> dict:
    try:
        multiplier = resolve_factor(db_recipe.servings, target_servings=servings, factor=factor)
    except ScalingError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ingredients = scale_ingredients(db_recipe.ingredients, multiplier)
    if units is not None:
        ingredients = convert_ingredients(ingredients, units)

    scaled_servings = None
    if db_recipe.servings:
        scaled_servings = servings if servings is not None else max(1, round(db_recipe.servings * multiplier))

    return {
        "id": db_recipe.id,
        "name": db_recipe.name,
        "factor": float(multiplier),
        "servings": scaled_servings,
        "original_servings": db_recipe.servings,
        "unit_system": units.value if units is not None else None,
        "ingredients": ingredients,
        "instructions": db_recipe.instructions,
    }


@router.post("/", response_model=schemas.Recipe, status_code=status.HTTP_201_CREATED)
def create_recipe(
        recipe: schemas.RecipeCreate,
        db: Session = Depends(get_db),
        current_user: models.User = Depends(get_current_active_user)
):
    """
    Create a new recipe for the currently authenticated user.
    """
    logger.debug(f"User {current_user.email} is creating a new recipe.")
    return crud.create_recipe(db=db, recipe=recipe, user_id=current_user.id)


@router.get("/", response_model=List[schemas.Recipe])
def read_recipes(
        request: Request,
        response: Response,
        skip: int = Query(default=0, ge=0, description="Number of records to skip for pagination"),
        limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of records to return (1-1000)"),
        sort: Optional[str] = Query(
            default=None,
            description="Comma-separated sort fields. Prefix with '-' for descending order. "
            "Valid fields: created_at, updated_at, name, rating, prep_time_minutes, category. "
            "Defaults to '-created_at'.",
        ),
        db: Session = Depends(get_db),
        current_user: models.User = Depends(get_current_active_user)
):
    """
    Retrieve the current user's recipes, newest first.

    **Filtering:** bracket notation `field[operator]=value`.

    - `?name[like]=cookie` - name contains 'cookie'
    - `?category[eq]=Dessert`
    - `?ingredients[like]=chicken` - has an ingredient containing 'chicken'
    - `?is_favorite[eq]=true`
    - `?rating[gte]=4`

    Returns the matching count in `X-Total-Count` and the size of the whole
    collection in `X-Collection-Count`.
    """
    filters_list = parse_filters(request.query_params)
    logger.debug(f"Fetching recipes with skip={skip}, limit={limit}, filters={filters_list}, sort={sort}.")
    recipes, total_count = crud.get_recipes(
        db,
        user_id=current_user.id,
        skip=skip,
        limit=limit,
        filters_list=filters_list,
        sort_by=sort,
    )
    response.headers["X-Total-Count"] = str(total_count)
    response.headers["X-Collection-Count"] = str(crud.count_user_recipes(db, current_user.id))
    return recipes


@router.get("/{recipe_id}", response_model=schemas.Recipe)
def read_recipe(
        recipe_id: UUID,
        db: Session = Depends(get_db),
        current_user: models.User = Depends(get_current_active_user)
):
    """
    Retrieve a single recipe by its ID.
    """
    logger.debug(f"Fetching recipe with ID: {recipe_id}")
    return get_owned_recipe(db, recipe_id, current_user)


@router.put("/{recipe_id}", response_model=schemas.Recipe)
def update_recipe(
        recipe_id: UUID,
        recipe: schemas.RecipeUpdate,
        db: Session = Depends(get_db),
        current_user: models.User = Depends(get_current_active_user)
):
    """
    Update a recipe's content. Only the owner of the recipe can do this.
    """
    logger.debug(f"User {current_user.email} is updating recipe with ID: {recipe_id}")
    get_owned_recipe(db, recipe_id, current_user, action="update")
    return crud.update_recipe(db=db, recipe_id=recipe_id, recipe_update=recipe)


@router.delete("/{recipe_id}", response_model=schemas.Recipe)
def delete_recipe(
        recipe_id: UUID,
        db: Session = Depends(get_db),
        current_user: models.User = Depends(get_current_active_user)
):
    """
    Delete a recipe. Only the owner of the recipe can do this.
    """
    logger.debug(f"User {current_user.email} is deleting recipe with ID: {recipe_id}")
    db_recipe = get_owned_recipe(db, recipe_id, current_user, action="delete")
    # Serialize before the row goes away
    deleted = schemas.Recipe.model_validate(db_recipe)
    crud.delete_recipe(db=db, recipe_id=recipe_id)
    return deleted


# --- Personal flags ---

@router.post("/{recipe_id}/favorite", response_model=schemas.Recipe)
def toggle_favorite(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Flip the favorite flag on a recipe.
    """
    get_owned_recipe(db, recipe_id, current_user, action="update")
    return crud.toggle_favorite(db, recipe_id)


@router.put("/{recipe_id}/rating", response_model=schemas.Recipe)
def set_rating(
    recipe_id: UUID,
    rating: schemas.RatingUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Set a 1-5 star rating. Send `{"rating": null}` to clear it.
    """
    get_owned_recipe(db, recipe_id, current_user, action="update")
    return crud.set_rating(db, recipe_id, rating.rating)


@router.put("/{recipe_id}/visibility", response_model=schemas.Recipe)
def set_visibility(
    recipe_id: UUID,
    visibility: schemas.VisibilityUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Make a recipe public (readable through its share link) or private.
    """
    get_owned_recipe(db, recipe_id, current_user, action="update")
    logger.info(f"User {current_user.email} set recipe {recipe_id} public={visibility.is_public}")
    return crud.set_public(db, recipe_id, visibility.is_public)


@router.get("/{recipe_id}/share", response_model=schemas.ShareLink)
def get_share_link(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Return the public link for a recipe. The link only resolves once the
    recipe has been made public.
    """
    db_recipe = get_owned_recipe(db, recipe_id, current_user)
    return {
        "recipe_id": db_recipe.id,
        "share_url": share_url(db_recipe.id),
        "is_public": db_recipe.is_public,
    }


# --- Display views ---

@router.get("/{recipe_id}/scaled", response_model=schemas.ScaledRecipe)
def read_scaled_recipe(
    recipe_id: UUID,
    servings: Optional[int] = Query(default=None, ge=1, description="Target number of servings"),
    factor: Optional[float] = Query(default=None, gt=0, description="Multiplier, e.g. 0.5 or 2"),
    units: Optional[UnitSystem] = Query(default=None, description="Convert to 'metric' or 'imperial'"),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Return the recipe with ingredient amounts scaled for display.
    Nothing is saved.
    """
    db_recipe = get_owned_recipe(db, recipe_id, current_user)
    return build_scaled_view(db_recipe, servings, factor, units)


@router.get("/{recipe_id}/print", response_class=PlainTextResponse)
def print_recipe(
    recipe_id: UUID,
    servings: Optional[int] = Query(default=None, ge=1),
    factor: Optional[float] = Query(default=None, gt=0),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_active_user)
):
    """
    Plain-text printable version of a recipe, optionally scaled.
    """
    db_recipe = get_owned_recipe(db, recipe_id, current_user)
    view = build_scaled_view(db_recipe, servings, factor)
    return render_printable(db_recipe, ingredients=view["ingredients"], servings=view["servings"])
