from types import SimpleNamespace
from uuid import UUID

from recipe_collection.models import RecipeCategory
from recipe_collection.presentation import (
    format_ingredient_line,
    instruction_steps,
    render_printable,
    share_url,
)


def make_recipe(**overrides):
    fields = dict(
        name="Chocolate Chip Cookies",
        prep_time_minutes=20,
        servings=24,
        category=RecipeCategory.DESSERT,
        instructions="Preheat oven to 350F.\n\n  Cream butter and sugar.  \nBake 12 minutes.\n",
        ingredients=[
            SimpleNamespace(name="flour", amount="2 1/4", unit="cups"),
            SimpleNamespace(name="salt", amount="", unit=""),
        ],
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_share_url():
    recipe_id = UUID("12345678-1234-5678-1234-567812345678")
    assert share_url(recipe_id, base_url="https://example.com/") == (
        "https://example.com/recipe/12345678-1234-5678-1234-567812345678"
    )


def test_instruction_steps_drop_blank_lines():
    assert instruction_steps("One\n\n  Two  \r\nThree") == ["One", "Two", "Three"]
    assert instruction_steps("") == []


def test_format_ingredient_line_skips_empty_parts():
    assert format_ingredient_line("2", "cups", "flour") == "2 cups flour"
    assert format_ingredient_line("", "", "salt") == "salt"


def test_render_printable():
    text = render_printable(make_recipe(), site_name="recipes.test")

    title = "Chocolate Chip Cookies"
    assert text.startswith(f"{title}\n{'=' * len(title)}\n")
    assert "20 minutes | Serves 24 | Dessert" in text
    assert "* 2 1/4 cups flour" in text
    assert "* salt" in text
    assert "1. Preheat oven to 350F.\n2. Cream butter and sugar.\n3. Bake 12 minutes." in text
    assert text.rstrip().endswith("Recipe shared from recipes.test")


def test_render_printable_omits_missing_metadata():
    text = render_printable(make_recipe(prep_time_minutes=0, servings=None), site_name="x")
    lines = text.splitlines()
    assert lines[2] == "Dessert"


def test_render_printable_with_scaled_ingredients():
    scaled = [{"name": "flour", "amount": "4 1/2", "unit": "cups"}]
    text = render_printable(make_recipe(), ingredients=scaled, servings=48, site_name="x")
    assert "Serves 48" in text
    assert "* 4 1/2 cups flour" in text
    assert "salt" not in text
