"""Domain models for logging foods into meals."""

from dataclasses import dataclass

from health_tracker.domain.nutrition import FoodRecord, NutritionSnapshot


@dataclass(frozen=True)
class MealFoodEntry:
    """Food item payload accepted by the meal backend."""

    meal_id: str
    food_id: int | None
    food_name: str
    quantity: float
    unit: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
    sodium: float
    calcium: float
    iron: float
    potassium: float
    serving_size: str

    @classmethod
    def from_snapshot(
        cls,
        meal_id: str,
        food: FoodRecord,
        quantity: float,
        unit: str,
        snapshot: NutritionSnapshot,
    ) -> "MealFoodEntry":
        """Build an entry from a food and its scaled nutrients."""
        return cls(
            meal_id=meal_id,
            food_id=food.id,
            food_name=food.name,
            quantity=quantity,
            unit=unit or "g",
            calories=int(snapshot.calories),
            protein=snapshot.protein,
            carbs=snapshot.carbs,
            fat=snapshot.total_fat,
            fiber=snapshot.fiber,
            sugar=snapshot.sugar,
            sodium=snapshot.sodium,
            calcium=snapshot.calcium,
            iron=snapshot.iron,
            potassium=snapshot.potassium,
            serving_size=food.serving_size,
        )
