# presentation.py
# Share links and the printable plain-text rendering of a recipe.

from typing import List, Optional
from uuid import UUID

from recipe_collection.core.config import settings


def share_url(recipe_id: UUID, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")
    return f"{base}/recipe/{recipe_id}"


def instruction_steps(instructions: str) -> List[str]:
    """Split instructions into trimmed, non-blank steps."""
    return [step.strip() for step in (instructions or "").split("\n") if step.strip()]


def format_ingredient_line(amount: str, unit: str, name: str) -> str:
    return " ".join(part for part in (amount, unit, name) if part)


def render_printable(
    recipe,
    ingredients: Optional[list] = None,
    servings: Optional[int] = None,
    site_name: Optional[str] = None,
) -> str:
    """
    Render a recipe as plain text suitable for printing.

    ``ingredients`` overrides the recipe's own lines, e.g. with a scaled
    copy (dicts with name/amount/unit), and ``servings`` the
    serving count shown alongside it.
    """
    if ingredients is None:
        ingredients = [
            {"name": i.name, "amount": i.amount, "unit": i.unit}
            for i in recipe.ingredients
        ]
    category = getattr(recipe.category, "value", recipe.category)

    lines = [recipe.name, "=" * len(recipe.name)]

    details = []
    if recipe.prep_time_minutes and recipe.prep_time_minutes > 0:
        details.append(f"{recipe.prep_time_minutes} minutes")
    servings = servings or recipe.servings
    if servings:
        details.append(f"Serves {servings}")
    details.append(category)
    lines.append(" | ".join(details))

    lines += ["", "Ingredients", "-----------"]
    for ingredient in ingredients:
        lines.append(
            "* " + format_ingredient_line(ingredient["amount"], ingredient["unit"], ingredient["name"])
        )

    lines += ["", "Instructions", "------------"]
    for number, step in enumerate(instruction_steps(recipe.instructions), start=1):
        lines.append(f"{number}. {step}")

    lines += ["", f"Recipe shared from {site_name or settings.SITE_NAME}"]
    return "\n".join(lines) + "\n"
