# filters.py
# Bracket-notation filtering and comma-separated sorting for recipe queries.

from typing import Any, Callable, Dict, List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Query
from sqlalchemy import asc, desc
import re

from recipe_collection import models


class Filter:
    def __init__(self, field: str, operator: str, value: Any):
        self.field = field
        self.operator = operator
        self.value = value

    def __repr__(self):
        return f"Filter({self.field} {self.operator} {self.value})"


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise ValueError(f"not a boolean: {value}")


def _to_category(value: str) -> models.RecipeCategory:
    return models.RecipeCategory(value.strip())


# field name -> (column, converter)
ALLOWED_FIELDS: Dict[str, tuple] = {
    'name': (models.Recipe.name, str),
    'category': (models.Recipe.category, _to_category),
    'prep_time_minutes': (models.Recipe.prep_time_minutes, int),
    'servings': (models.Recipe.servings, int),
    'rating': (models.Recipe.rating, int),
    'is_favorite': (models.Recipe.is_favorite, _to_bool),
    'is_public': (models.Recipe.is_public, _to_bool),
}

SORT_FIELDS = {
    'created_at': models.Recipe.created_at,
    'updated_at': models.Recipe.updated_at,
    'name': models.Recipe.name,
    'rating': models.Recipe.rating,
    'prep_time_minutes': models.Recipe.prep_time_minutes,
    'category': models.Recipe.category,
}

DEFAULT_SORT = "-created_at"


def parse_filters(query_params) -> List[Filter]:
    filters = []
    # Pattern to match field[operator]=value
    pattern = re.compile(r"^(\w+)\[(\w+)\]$")

    for key, value in query_params.items():
        match = pattern.match(key)
        if match:
            field, operator = match.groups()
            # An empty search box means "no filter"
            if value is None or str(value).strip() == "":
                continue
            filters.append(Filter(field, operator, value))

    return filters


def _convert(f: Filter, converter: Callable[[str], Any], raw: str) -> Any:
    try:
        return converter(raw)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid value '{raw}' for filter {f.field}[{f.operator}]",
        )


def apply_filters(query: Query, filters: List[Filter]) -> Query:
    for f in filters:

        # "Has ingredient": any ingredient name contains the text
        if f.field == 'ingredients':
            if f.operator == 'like':
                query = query.filter(models.Recipe.ingredients.any(
                    models.RecipeIngredient.name.icontains(f.value.strip(), autoescape=True)
                ))
            elif f.operator == 'all':
                for ing in f.value.split(','):
                    ing = ing.strip()
                    if ing:
                        query = query.filter(models.Recipe.ingredients.any(
                            models.RecipeIngredient.name.icontains(ing, autoescape=True)
                        ))
            continue

        field = ALLOWED_FIELDS.get(f.field)
        if not field:
            continue
        model_attr, converter = field

        if f.operator == 'like':
            query = query.filter(model_attr.icontains(f.value.strip(), autoescape=True))
        elif f.operator == 'in':
            vals = [_convert(f, converter, v) for v in f.value.split(',') if v.strip()]
            query = query.filter(model_attr.in_(vals))
        elif f.operator in ('eq', 'neq', 'gt', 'gte', 'lt', 'lte'):
            value = _convert(f, converter, f.value)
            if f.operator == 'eq':
                query = query.filter(model_attr == value)
            elif f.operator == 'neq':
                query = query.filter(model_attr != value)
            elif f.operator == 'gt':
                query = query.filter(model_attr > value)
            elif f.operator == 'gte':
                query = query.filter(model_attr >= value)
            elif f.operator == 'lt':
                query = query.filter(model_attr < value)
            elif f.operator == 'lte':
                query = query.filter(model_attr <= value)

    return query


def apply_sorting(query: Query, sort_param: Optional[str]) -> Query:
    if not sort_param:
        sort_param = DEFAULT_SORT

    for field in sort_param.split(','):
        field = field.strip()
        direction = asc
        if field.startswith('-'):
            direction = desc
            field = field[1:]

        model_attr = SORT_FIELDS.get(field)
        if model_attr is not None:
            # Unrated recipes go last either way
            query = query.order_by(direction(model_attr).nulls_last())

    # Stable order for pagination
    return query.order_by(desc(models.Recipe.created_at), models.Recipe.id)
