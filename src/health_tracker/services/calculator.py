"""Nutrition scaling for a chosen quantity."""

import math

from health_tracker.domain.nutrition import FoodRecord, NutritionSnapshot

BASELINE_SERVING = 100

# Snapshot field -> (record field, decimal places).
_SCALED_FIELDS: dict[str, tuple[str, int]] = {
    "calories": ("calories", 0),
    "protein": ("protein", 1),
    "carbs": ("carbohydrate", 1),
    "total_fat": ("total_fat", 1),
    "saturated_fat": ("saturated_fat", 1),
    "fiber": ("fiber", 1),
    "sugar": ("sugar", 1),
    "sodium": ("sodium", 0),
    "cholesterol": ("cholesterol", 0),
    "calcium": ("calcium", 0),
    "iron": ("iron", 1),
    "magnesium": ("magnesium", 0),
    "phosphorus": ("phosphorus", 0),
    "potassium": ("potassium", 0),
    "zinc": ("zinc", 1),
    "vitamin_c": ("vitamin_c", 1),
    "vitamin_a": ("vitamin_a", 1),
    "vitamin_b6": ("vitamin_b6", 1),
    "vitamin_b12": ("vitamin_b12", 1),
    "water": ("water", 1),
}

COMMON_UNITS: tuple[tuple[str, str], ...] = (
    ("g", "grams (g)"),
    ("kg", "kilograms (kg)"),
    ("oz", "ounces (oz)"),
    ("lb", "pounds (lb)"),
    ("cup", "cup"),
    ("tbsp", "tablespoon"),
    ("tsp", "teaspoon"),
    ("piece", "piece/item"),
    ("slice", "slice"),
    ("serving", "serving"),
)


def _round_half_up(value: float, digits: int) -> float:
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def _valid_quantity(quantity: object) -> float | None:
    if isinstance(quantity, bool):
        return None
    try:
        value = float(quantity)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def calculate_nutrition(
    food: FoodRecord | None, quantity: float, unit: str = "g"
) -> NutritionSnapshot:
    """Scale a food's per-100 nutrients to ``quantity``.

    ``unit`` is a display label only: every unit scales as ``quantity / 100``
    against the stored baseline. Degenerate input yields an all-zero snapshot.
    """
    value = _valid_quantity(quantity)
    if food is None or value is None:
        return NutritionSnapshot()
    multiplier = value / BASELINE_SERVING
    scaled = {
        snapshot_field: _round_half_up(
            getattr(food, record_field) * multiplier, digits
        )
        for snapshot_field, (record_field, digits) in _SCALED_FIELDS.items()
    }
    return NutritionSnapshot(**scaled)


def format_nutrition_value(value: object, unit: str = "") -> str:
    """Format a nutrient amount for display."""
    if value is None:
        return f"0{unit}"
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return f"0{unit}"
    if not math.isfinite(number):
        return f"0{unit}"
    if number < 10:
        return f"{_round_half_up(number, 1):.1f}{unit}"
    return f"{int(_round_half_up(number, 0))}{unit}"
