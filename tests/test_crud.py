from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from recipe_collection import crud, schemas
from recipe_collection.filters import Filter
from recipe_collection.models import RecipeCategory


def make_user(db: Session):
    return crud.create_user(
        db, schemas.UserCreate(email=f"crud_{uuid4().hex[:8]}@example.com", password="password")
    )


def make_recipe(db: Session, user_id, name="Omelette", **overrides):
    data = dict(
        name=name,
        ingredients=[
            schemas.IngredientCreate(name="Eggs", amount="3", unit="pieces"),
            schemas.IngredientCreate(name="Butter", amount="1", unit="tbsp"),
        ],
        instructions="Whisk.\nFry.",
        servings=1,
    )
    data.update(overrides)
    return crud.create_recipe(db, schemas.RecipeCreate(**data), user_id=user_id)


def test_create_user_hashes_password(db: Session):
    user = make_user(db)
    assert user.hashed_password != "password"
    assert crud.verify_password("password", user.hashed_password)
    assert crud.get_user_by_email(db, user.email.upper()).id == user.id


def test_create_recipe(db: Session):
    user = make_user(db)
    recipe = make_recipe(db, user.id)

    assert recipe.owner_id == user.id
    assert recipe.category == RecipeCategory.MAIN_COURSE
    assert recipe.is_favorite is False
    assert recipe.is_public is False
    assert recipe.rating is None
    assert [(i.position, i.name) for i in recipe.ingredients] == [(0, "Eggs"), (1, "Butter")]


def test_update_recipe_replaces_ingredients(db: Session):
    user = make_user(db)
    recipe = make_recipe(db, user.id)
    crud.set_rating(db, recipe.id, 4)

    update = schemas.RecipeUpdate(
        name="Cheese Omelette",
        ingredients=[schemas.IngredientCreate(name="Cheddar", amount="1/4", unit="cups")],
        instructions="Whisk.\nFry.\nFold.",
    )
    updated = crud.update_recipe(db, recipe.id, update)

    assert updated.name == "Cheese Omelette"
    assert [i.name for i in updated.ingredients] == ["Cheddar"]
    assert updated.rating == 4
    assert updated.updated_at >= updated.created_at


def test_update_missing_recipe(db: Session):
    update = schemas.RecipeUpdate(name="Nothing", instructions="None.")
    assert crud.update_recipe(db, uuid4(), update) is None


def test_delete_recipe(db: Session):
    user = make_user(db)
    recipe = make_recipe(db, user.id)

    crud.delete_recipe(db, recipe.id)
    assert crud.get_recipe(db, recipe.id) is None
    assert crud.delete_recipe(db, uuid4()) is None


def test_set_rating_rejects_out_of_range(db: Session):
    user = make_user(db)
    recipe = make_recipe(db, user.id)

    with pytest.raises(ValueError):
        crud.set_rating(db, recipe.id, 6)
    assert crud.set_rating(db, recipe.id, None).rating is None


def test_get_public_recipe(db: Session):
    user = make_user(db)
    recipe = make_recipe(db, user.id)

    assert crud.get_public_recipe(db, recipe.id) is None
    crud.set_public(db, recipe.id, True)
    assert crud.get_public_recipe(db, recipe.id).id == recipe.id


def test_get_recipes_with_filters(db: Session):
    user = make_user(db)
    make_recipe(db, user.id, "Omelette")
    make_recipe(db, user.id, "Brownies", category=RecipeCategory.DESSERT)
    other = make_user(db)
    make_recipe(db, other.id, "Brownies")

    recipes, total = crud.get_recipes(
        db, user_id=user.id, filters_list=[Filter("category", "eq", "Dessert")]
    )
    assert total == 1
    assert [r.name for r in recipes] == ["Brownies"]
    assert crud.count_user_recipes(db, user.id) == 2
