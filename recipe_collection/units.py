# units.py
# Metric/imperial conversion of ingredient lines for display, using pint.
# Count-style units ("pieces", "cloves", "cans") have no conversion and are
# left alone.

from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple

import pint

from recipe_collection.scaling import format_amount, parse_amount, parse_range

ureg = pint.UnitRegistry()


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


# How people write units -> pint unit name
UNIT_ALIASES = {
    "cup": "cup",
    "cups": "cup",
    "c": "cup",
    "tablespoon": "tablespoon",
    "tablespoons": "tablespoon",
    "tbsp": "tablespoon",
    "tbs": "tablespoon",
    "teaspoon": "teaspoon",
    "teaspoons": "teaspoon",
    "tsp": "teaspoon",
    "fl oz": "fluid_ounce",
    "fluid ounce": "fluid_ounce",
    "fluid ounces": "fluid_ounce",
    "oz": "ounce",
    "ounce": "ounce",
    "ounces": "ounce",
    "lb": "pound",
    "lbs": "pound",
    "pound": "pound",
    "pounds": "pound",
    "ml": "milliliter",
    "milliliter": "milliliter",
    "milliliters": "milliliter",
    "l": "liter",
    "liter": "liter",
    "liters": "liter",
    "litre": "liter",
    "litres": "liter",
    "g": "gram",
    "gram": "gram",
    "grams": "gram",
    "kg": "kilogram",
    "kilogram": "kilogram",
    "kilograms": "kilogram",
}

UNIT_SYSTEMS = {
    "cup": UnitSystem.IMPERIAL,
    "tablespoon": UnitSystem.IMPERIAL,
    "teaspoon": UnitSystem.IMPERIAL,
    "fluid_ounce": UnitSystem.IMPERIAL,
    "ounce": UnitSystem.IMPERIAL,
    "pound": UnitSystem.IMPERIAL,
    "milliliter": UnitSystem.METRIC,
    "liter": UnitSystem.METRIC,
    "gram": UnitSystem.METRIC,
    "kilogram": UnitSystem.METRIC,
}

VOLUME_UNITS = {"cup", "tablespoon", "teaspoon", "fluid_ounce", "milliliter", "liter"}
WEIGHT_UNITS = {"ounce", "pound", "gram", "kilogram"}

PREFERRED_UNITS = {
    UnitSystem.METRIC: {"volume": "milliliter", "weight": "gram"},
    UnitSystem.IMPERIAL: {"volume": "cup", "weight": "ounce"},
}

# Matches the unit names offered by the ingredient form
DISPLAY_NAMES = {
    "cup": "cups",
    "tablespoon": "tbsp",
    "teaspoon": "tsp",
    "fluid_ounce": "fl oz",
    "ounce": "oz",
    "pound": "lbs",
    "milliliter": "ml",
    "liter": "l",
    "gram": "g",
    "kilogram": "kg",
}

# (threshold, larger unit) for tidying up big results
SIMPLIFICATION_THRESHOLDS = {
    "milliliter": (1000, "liter"),
    "gram": (1000, "kilogram"),
    "ounce": (16, "pound"),
}

# Small imperial volumes read better as spoons: (unit, below, step down to)
SMALL_VOLUME_STEPS = (
    ("cup", Fraction(1, 4), "tablespoon"),
    ("tablespoon", Fraction(1), "teaspoon"),
)


def get_pint_unit(unit: str) -> Optional[str]:
    return UNIT_ALIASES.get((unit or "").lower().strip())


def get_unit_type(pint_unit: str) -> Optional[str]:
    if pint_unit in VOLUME_UNITS:
        return "volume"
    if pint_unit in WEIGHT_UNITS:
        return "weight"
    return None


def convert_value(value: Fraction, unit: str, target_system: UnitSystem) -> Tuple[Fraction, str]:
    """
    Convert a numeric quantity to the target system.
    Returns the original value and unit when no conversion applies.
    """
    pint_unit = get_pint_unit(unit)
    if pint_unit is None or UNIT_SYSTEMS.get(pint_unit) == target_system:
        return value, unit

    unit_type = get_unit_type(pint_unit)
    target_unit = PREFERRED_UNITS[target_system][unit_type]

    try:
        converted = (float(value) * getattr(ureg, pint_unit)).to(getattr(ureg, target_unit))
    except pint.DimensionalityError:
        return value, unit

    if target_unit in SIMPLIFICATION_THRESHOLDS:
        threshold, larger_unit = SIMPLIFICATION_THRESHOLDS[target_unit]
        if converted.magnitude >= threshold:
            converted = converted.to(getattr(ureg, larger_unit))
            target_unit = larger_unit

    for unit_name, limit, smaller_unit in SMALL_VOLUME_STEPS:
        if target_unit == unit_name and converted.magnitude < limit:
            converted = converted.to(getattr(ureg, smaller_unit))
            target_unit = smaller_unit

    return _round_magnitude(converted.magnitude), DISPLAY_NAMES.get(target_unit, target_unit)


def _round_magnitude(magnitude: float) -> Fraction:
    return Fraction(round(magnitude, 2)).limit_denominator(100)


def _to_display_unit(value: Fraction, unit: str, display_unit: str) -> Fraction:
    converted = (float(value) * getattr(ureg, get_pint_unit(unit))).to(
        getattr(ureg, get_pint_unit(display_unit))
    )
    return _round_magnitude(converted.magnitude)


def _convert_range(amount: str, bounds: Tuple[Fraction, Fraction], unit: str,
                   target_system: UnitSystem) -> Tuple[str, str]:
    low, high = bounds
    high_value, new_unit = convert_value(high, unit, target_system)
    if new_unit == unit:
        return amount, unit
    low_value, low_unit = convert_value(low, unit, target_system)
    if low_unit != new_unit:
        # both ends share the unit picked for the larger one
        low_value = _to_display_unit(low, unit, new_unit)
    fractions = target_system == UnitSystem.IMPERIAL
    return f"{format_amount(low_value, fractions)}-{format_amount(high_value, fractions)}", new_unit


def convert_amount(amount: str, unit: str, target_system: UnitSystem) -> Tuple[str, str]:
    """
    Convert an amount string and unit for display.
    Ranges convert both ends; other text is left as it is.
    """
    value = parse_amount(amount)
    if value is None:
        bounds = parse_range(amount)
        if bounds is None:
            return amount, unit
        return _convert_range(amount, bounds, unit, target_system)
    converted, new_unit = convert_value(value, unit, target_system)
    if new_unit == unit:
        return amount, unit
    return format_amount(converted, fractions=target_system == UnitSystem.IMPERIAL), new_unit


def convert_ingredients(ingredients: list, target_system: UnitSystem) -> list:
    """
    Convert a list of scaled ingredient dicts in place and return it.
    """
    for ingredient in ingredients:
        ingredient["amount"], ingredient["unit"] = convert_amount(
            ingredient["amount"], ingredient["unit"], target_system
        )
    return ingredients
