"""Nutrition domain models."""

from dataclasses import dataclass
from enum import Enum


class FoodCategory(str, Enum):
    """Coarse food classification derived from the food name."""

    MEAT = "meat"
    SEAFOOD = "seafood"
    DAIRY = "dairy"
    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    GRAIN = "grain"
    OTHER = "other"


# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[FoodCategory, tuple[str, ...]], ...] = (
    (FoodCategory.MEAT, ("chicken", "beef", "pork", "lamb", "turkey", "meat")),
    (FoodCategory.SEAFOOD, ("fish", "salmon", "tuna", "shrimp")),
    (FoodCategory.DAIRY, ("milk", "cheese", "yogurt", "butter")),
    (FoodCategory.FRUIT, ("apple", "banana", "orange", "berry")),
    (FoodCategory.VEGETABLE, ("broccoli", "spinach", "carrot", "lettuce")),
    (FoodCategory.GRAIN, ("rice", "bread", "pasta", "wheat")),
)


def categorize_food(name: str) -> FoodCategory:
    """Classify a food by keyword matches against its lower-cased name."""
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return FoodCategory.OTHER


DEFAULT_SERVING_SIZE = "100 g"

# Numeric fields stored on a food record, expressed per 100 g baseline.
NUTRIENT_FIELDS: tuple[str, ...] = (
    "calories",
    "total_fat",
    "saturated_fat",
    "cholesterol",
    "sodium",
    "protein",
    "carbohydrate",
    "fiber",
    "sugar",
    "calcium",
    "iron",
    "magnesium",
    "phosphorus",
    "potassium",
    "zinc",
    "vitamin_c",
    "vitamin_a",
    "vitamin_b6",
    "vitamin_b12",
    "water",
)


@dataclass(frozen=True)
class FoodRecord:
    """A food from the catalog with nutrients per baseline serving."""

    id: int
    name: str
    serving_size: str = DEFAULT_SERVING_SIZE
    calories: float = 0.0
    total_fat: float = 0.0
    saturated_fat: float = 0.0
    cholesterol: float = 0.0
    sodium: float = 0.0
    protein: float = 0.0
    carbohydrate: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    magnesium: float = 0.0
    phosphorus: float = 0.0
    potassium: float = 0.0
    zinc: float = 0.0
    vitamin_c: float = 0.0
    vitamin_a: float = 0.0
    vitamin_b6: float = 0.0
    vitamin_b12: float = 0.0
    water: float = 0.0
    unit: str = "g"
    category: FoodCategory = FoodCategory.OTHER


@dataclass(frozen=True)
class NutritionSnapshot:
    """Nutrients of a food scaled to a chosen quantity."""

    calories: float = 0
    protein: float = 0.0
    carbs: float = 0.0
    total_fat: float = 0.0
    saturated_fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0
    cholesterol: float = 0
    calcium: float = 0
    iron: float = 0.0
    magnesium: float = 0
    phosphorus: float = 0
    potassium: float = 0
    zinc: float = 0.0
    vitamin_c: float = 0.0
    vitamin_a: float = 0.0
    vitamin_b6: float = 0.0
    vitamin_b12: float = 0.0
    water: float = 0.0
