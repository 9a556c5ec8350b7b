# scaling.py
# Scales ingredient amounts for display. Amounts are stored as free-form
# strings ("2", "1/2", "1 1/2", "2-3", "to taste"), so parsing is lenient and
# anything that isn't a quantity is passed through untouched.

import logging
import math
import re
from fractions import Fraction
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

UNICODE_FRACTIONS = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅕": "1/5",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

# Denominators considered "nice" when displaying, in order of preference
NICE_DENOMINATORS = (2, 3, 4, 8)
NICE_TOLERANCE = Fraction(1, 50)

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL_RE = re.compile(r"^(\d+\.?\d*|\.\d+)$")
_RANGE_RE = re.compile(r"^(.+?)\s*(?:-|–|\bto\b)\s*(.+)$")


class ScalingError(ValueError):
    """Raised when a scale factor cannot be worked out."""


def _replace_unicode_fractions(text: str) -> str:
    for glyph, ascii_fraction in UNICODE_FRACTIONS.items():
        # "1½" reads as a mixed number
        text = re.sub(rf"(\d){glyph}", rf"\1 {ascii_fraction}", text)
        text = text.replace(glyph, ascii_fraction)
    return text


def parse_amount(text: Optional[str]) -> Optional[Fraction]:
    """
    Parse an amount string into an exact Fraction.

    Accepts integers, decimals, simple fractions, mixed numbers and unicode
    vulgar fractions. Returns None when the text is not a single quantity.
    """
    if text is None:
        return None
    cleaned = _replace_unicode_fractions(text.strip())
    if not cleaned:
        return None

    match = _MIXED_RE.match(cleaned)
    if match:
        whole, numerator, denominator = (int(g) for g in match.groups())
        if denominator == 0:
            return None
        return whole + Fraction(numerator, denominator)

    match = _FRACTION_RE.match(cleaned)
    if match:
        numerator, denominator = (int(g) for g in match.groups())
        if denominator == 0:
            return None
        return Fraction(numerator, denominator)

    if _DECIMAL_RE.match(cleaned):
        return Fraction(cleaned)

    return None


def parse_range(text: Optional[str]) -> Optional[Tuple[Fraction, Fraction]]:
    """Parse "2-3" or "2 to 3" into its two ends, or None."""
    if not text:
        return None
    match = _RANGE_RE.match(_replace_unicode_fractions(text.strip()))
    if not match:
        return None
    low, high = parse_amount(match.group(1)), parse_amount(match.group(2))
    if low is None or high is None:
        return None
    return low, high


def _format_decimal(value: Fraction) -> str:
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    if text in ("", "0") and value > 0:
        # smallest amount two places can show
        return "0.01"
    return text or "0"


def format_amount(value: Fraction, fractions: bool = True) -> str:
    """
    Render a quantity the way a cook would write it.

    Values close to a half, third, quarter or eighth become fractions
    ("1 1/2", "2/3"); anything else is a decimal rounded to two places.
    Pass fractions=False to always get the decimal form (metric units).
    """
    value = Fraction(value)
    if value <= 0:
        return "0"

    whole = value.numerator // value.denominator
    remainder = value - whole
    if remainder == 0:
        return str(whole)
    if not fractions:
        return _format_decimal(value)

    best = None
    best_error = None
    for denominator in NICE_DENOMINATORS:
        candidate = Fraction(round(remainder * denominator), denominator)
        error = abs(remainder - candidate)
        if best_error is None or error < best_error:
            best, best_error = candidate, error

    # a tiny amount on its own shouldn't round away to nothing
    if best_error <= NICE_TOLERANCE and not (best == 0 and whole == 0):
        if best == 0:
            return str(whole)
        if best == 1:
            return str(whole + 1)
        fraction_text = f"{best.numerator}/{best.denominator}"
        return f"{whole} {fraction_text}" if whole else fraction_text

    return _format_decimal(value)


def scale_amount(text: str, factor: Fraction) -> str:
    """
    Multiply an amount string by factor and re-format it.
    Ranges scale both ends; non-numeric text is returned unchanged.
    """
    original = (text or "").strip()
    factor = Fraction(factor)
    if factor == 1 or not original:
        return original

    value = parse_amount(original)
    if value is not None:
        return format_amount(value * factor)

    bounds = parse_range(original)
    if bounds is not None:
        low, high = bounds
        return f"{format_amount(low * factor)}-{format_amount(high * factor)}"

    logger.debug(f"Amount '{original}' is not numeric, leaving it unscaled")
    return original


def resolve_factor(
    servings: Optional[int],
    target_servings: Optional[int] = None,
    factor: Optional[float] = None,
) -> Fraction:
    """
    Work out the multiplier for a scaled view.

    Either a target serving count (which needs the recipe's own servings)
    or an explicit factor may be given, not both. No arguments means 1.
    """
    if target_servings is not None and factor is not None:
        raise ScalingError("Give either servings or factor, not both")

    if target_servings is not None:
        if target_servings < 1:
            raise ScalingError("Servings must be at least 1")
        if not servings:
            raise ScalingError("Recipe does not declare servings to scale from")
        return Fraction(target_servings, servings)

    if factor is not None:
        if not math.isfinite(factor) or factor <= 0:
            raise ScalingError("Scale factor must be a positive number")
        multiplier = Fraction(str(factor)).limit_denominator(1000)
        if multiplier == 0:
            raise ScalingError("Scale factor is too small")
        return multiplier

    return Fraction(1)


def scale_ingredients(ingredients, factor: Fraction) -> List[dict]:
    """
    Return scaled copies of ingredient lines, keeping the original amount.
    Accepts ORM rows or dicts with name/amount/unit.
    """
    scaled = []
    for ingredient in ingredients:
        if isinstance(ingredient, dict):
            name, amount, unit = ingredient["name"], ingredient.get("amount", ""), ingredient.get("unit", "")
        else:
            name, amount, unit = ingredient.name, ingredient.amount, ingredient.unit
        scaled.append({
            "name": name,
            "amount": scale_amount(amount, factor),
            "unit": unit,
            "original_amount": amount,
            "original_unit": unit,
        })
    return scaled
